from pydantic import BaseModel, ConfigDict, field_validator


class LocationOption(BaseModel):
    """
    One entry of a location-service option list (province, district or ward).

    The code is the authoritative key; the service sends numeric codes,
    they are kept as strings.
    """
    model_config = ConfigDict(frozen=True)

    code: str
    name: str

    @field_validator("code", mode="before")
    @classmethod
    def coerce_code(cls, value):
        if isinstance(value, bool):
            raise ValueError("code must be a string or integer")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("code", "name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value
