from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Modelo base: campos snake_case en Python, camelCase en JSON"""
    model_config = {
        'from_attributes': True,
        'alias_generator': to_camel,
        'populate_by_name': True
    }
