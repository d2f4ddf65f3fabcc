# This file defines JSON request and response models for the five backend entities.
# It exists so create and update bodies are parsed before any RPC call and so OpenAPI shows each contract.
# Field names match the protobuf field names; every field is optional because the backend omits empty values.

from __future__ import annotations

from pydantic import BaseModel

from api_gateway.api.schemas.common import TimestampFields


class CustomerFields(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None


class CreateCustomer(CustomerFields):
    pass


class UpdateCustomer(CustomerFields):
    id: str | None = None


class Customer(TimestampFields, UpdateCustomer):
    pass


class GetListCustomerResponse(BaseModel):
    count: int | None = None
    customers: list[Customer] | None = None


class SystemUserFields(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    login: str | None = None
    phone: str | None = None
    email: str | None = None


class CreateSystemUser(SystemUserFields):
    pass


class UpdateSystemUser(SystemUserFields):
    id: str | None = None


class SystemUser(TimestampFields, UpdateSystemUser):
    pass


class GetListSystemUserResponse(BaseModel):
    count: int | None = None
    users: list[SystemUser] | None = None


class SellerFields(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    shop_id: str | None = None
    phone: str | None = None
    email: str | None = None


class CreateSeller(SellerFields):
    pass


class UpdateSeller(SellerFields):
    id: str | None = None


class Seller(TimestampFields, UpdateSeller):
    pass


class GetListSellerResponse(BaseModel):
    count: int | None = None
    sellers: list[Seller] | None = None


class BranchFields(BaseModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None


class CreateBranch(BranchFields):
    pass


class UpdateBranch(BranchFields):
    id: str | None = None


class Branch(TimestampFields, UpdateBranch):
    pass


class GetListBranchResponse(BaseModel):
    count: int | None = None
    branches: list[Branch] | None = None


class ShopFields(BaseModel):
    name: str | None = None
    branch_id: str | None = None
    address: str | None = None
    phone: str | None = None


class CreateShop(ShopFields):
    pass


class UpdateShop(ShopFields):
    id: str | None = None


class Shop(TimestampFields, UpdateShop):
    pass


class GetListShopResponse(BaseModel):
    count: int | None = None
    shops: list[Shop] | None = None
