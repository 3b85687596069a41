from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Boolean

from models.base import Base


class Address(Base):
    """
    Saved delivery address of a user.

    A user's addresses are read and written as a whole collection
    (AddressRepository.get_all / put_all); position keeps the display order.
    """
    __tablename__ = "addresses"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    full_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    province_code = Column(String, nullable=False)
    province_name = Column(String, nullable=False)
    district_code = Column(String, nullable=False)
    district_name = Column(String, nullable=False)
    ward_code = Column(String, nullable=False)
    ward_name = Column(String, nullable=False)
    street_address = Column(String, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)


class AddressDTO(BaseModel):
    id: str
    full_name: str
    phone_number: str
    province_code: str
    province_name: str
    district_code: str
    district_name: str
    ward_code: str
    ward_name: str
    street_address: str
    is_default: bool = False

    def one_line(self) -> str:
        return f"{self.street_address}, {self.ward_name}, {self.district_name}, {self.province_name}"


class AddressFormDTO(BaseModel):
    """Editable address form; location fields are filled from the AddressSelector."""
    full_name: str = ""
    phone_number: str = ""
    province_code: str = ""
    province_name: str = ""
    district_code: str = ""
    district_name: str = ""
    ward_code: str = ""
    ward_name: str = ""
    street_address: str = ""
    is_default: bool = False

    @classmethod
    def from_address(cls, address: AddressDTO) -> "AddressFormDTO":
        return cls.model_validate(address.model_dump(exclude={"id"}))

    def to_address(self, address_id: str) -> AddressDTO:
        return AddressDTO(
            id=address_id,
            full_name=self.full_name.strip(),
            phone_number=self.phone_number.strip(),
            province_code=self.province_code,
            province_name=self.province_name,
            district_code=self.district_code,
            district_name=self.district_name,
            ward_code=self.ward_code,
            ward_name=self.ward_name,
            street_address=self.street_address.strip(),
            is_default=self.is_default
        )
