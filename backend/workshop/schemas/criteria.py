from pydantic import BaseModel, field_validator


class CriterionSchema(BaseModel):
    name: str
    description: str = ""

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('criterion name cannot be empty')
        return v.strip()

    @field_validator('description', mode='before')
    @classmethod
    def validate_description(cls, v):
        return (v or "").strip()


def check_unique_names(criteria):
    """Shared validator body: criterion names must be unique within a stage"""
    if criteria is None:
        return criteria
    names = [c.name for c in criteria]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"duplicate criterion names: {', '.join(duplicates)}")
    return criteria
