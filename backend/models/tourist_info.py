from pydantic import BaseModel, ConfigDict, Field


class Attraction(BaseModel):
    name: str
    description: str


class Dish(BaseModel):
    name: str
    description: str


class Phrase(BaseModel):
    phrase: str
    translation: str


class TouristInfo(BaseModel):
    """AI-generated travel guide for a single country.

    Field aliases are the camelCase keys of the generation schema, so the
    model validates the raw service output and serializes back to it.
    """

    model_config = ConfigDict(populate_by_name=True)

    attractions: list[Attraction]
    best_time_to_visit: str = Field(alias="bestTimeToVisit")
    cuisine: list[Dish]
    cultural_etiquette: list[str] = Field(alias="culturalEtiquette")
    common_phrases: list[Phrase] = Field(alias="commonPhrases")
