from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelCaseDTO(BaseModel):
    """Response models serialised with camelCase keys (`model_dump(by_alias=True)`)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
