from typing import Optional

from pydantic import BaseModel, ValidationError


class ConfigSchema(BaseModel):
    api_key: Optional[str] = None
    base_url: str = "https://api.hevyapp.com/v1"
    timeout: float = 30.0


def validate_config(data: dict) -> ConfigSchema:
    try:
        return ConfigSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
