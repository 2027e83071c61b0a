from pydantic import BaseModel


class IdentityEmailAddress(BaseModel):
    id: str
    email_address: str


class IdentityPhoneNumber(BaseModel):
    id: str
    phone_number: str


class IdentityUserData(BaseModel):
    id: str
    email_addresses: list[IdentityEmailAddress] = []
    phone_numbers: list[IdentityPhoneNumber] = []
    first_name: str | None = None
    last_name: str | None = None
    primary_email_address_id: str | None = None
    primary_phone_number_id: str | None = None

    def primary_email(self) -> str:
        for address in self.email_addresses:
            if address.id == self.primary_email_address_id:
                return address.email_address
        return ""

    def primary_phone(self) -> str | None:
        for phone in self.phone_numbers:
            if phone.id == self.primary_phone_number_id:
                return phone.phone_number
        return None

    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    phone_number: str | None

    model_config = {"from_attributes": True}
