"""Public permission API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from headless_cms.application.dtos.content import PublicPermissions


class PublicPermissionsBody(BaseModel):
    """Public action flags for a collection. Omitted flags are closed."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    find: bool = False
    find_one: bool = Field(default=False, alias="findOne")
    create: bool = False
    update: bool = False
    delete: bool = False

    def to_dto(self) -> PublicPermissions:
        return PublicPermissions(
            find=self.find,
            findOne=self.find_one,
            create=self.create,
            update=self.update,
            delete=self.delete,
        )

    @classmethod
    def from_dto(cls, permissions: PublicPermissions) -> "PublicPermissionsBody":
        return cls.model_validate(permissions.to_dict())


class PublicPermissionsResponse(BaseModel):
    """Response for GET/PUT /permissions/{slug}."""

    slug: str
    permissions: PublicPermissionsBody
