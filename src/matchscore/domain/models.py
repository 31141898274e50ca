"""
Domain models (Pydantic).

These types represent the stable "contract" between the scoring core and its callers:
- account data snapshots (`Profile`, `Preferences`, `UserRecord`)
- explainable scoring output (`MatchResult`, `RankingResult`)

Inputs arrive from an external data store in more than one shape (camelCase keys,
flat `latitude`/`longitude` columns, a single preferred gender or a list), so the
validators below normalize everything into one canonical form before scoring.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

KNOWN_GENDERS: tuple[str, ...] = ("male", "female", "other")

ExerciseFrequency = Literal["never", "sometimes", "regularly"]


def _coerce_location(value: Any) -> Any:
    # Accept `{lat, lon}`, `{latitude, longitude}` or a GeoPoint; a null coordinate means "no location".
    if value is None or isinstance(value, GeoPoint):
        return value
    if isinstance(value, Mapping):
        lat = value.get("lat", value.get("latitude"))
        lon = value.get("lon", value.get("longitude"))
        if lat is None or lon is None:
            return None
        return {"lat": lat, "lon": lon}
    return value


def _normalize_tags(tags: Any) -> list[str]:
    # Order-preserving de-duplication; tags stay case-sensitive.
    if isinstance(tags, str):
        tags = [tags]
    elif isinstance(tags, (set, frozenset)):
        # Unordered input is sorted so tag order is reproducible.
        tags = sorted(t for t in tags if isinstance(t, str))
    out: list[str] = []
    for t in tags or []:
        if not isinstance(t, str):
            continue
        t = t.strip()
        if t and t not in out:
            out.append(t)
    return out


def _normalize_gender(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class Lifestyle(_CamelModel):
    """Lifestyle attributes; any field may be unknown."""

    smoking: bool | None = None
    drinking: bool | None = None
    exercise: ExerciseFrequency | None = None

    @field_validator("exercise", mode="before")
    @classmethod
    def _lower_exercise(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value


class Profile(_CamelModel):
    """Read-only snapshot of one user's profile."""

    id: str
    age: int
    gender: str | None = None
    location: GeoPoint | None = None
    interests: list[str] = Field(default_factory=list)
    relationship_goals: str | None = None
    lifestyle: Lifestyle | None = None
    bio: str | None = None
    education: str | None = None
    occupation: str | None = None

    # Display-only fields passed through to MatchResult.
    name: str | None = None
    profile_image: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flat_coordinates(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "location" not in data and ("latitude" in data or "lat" in data):
            data = dict(data)
            data["location"] = _coerce_location(data)
        return data

    @field_validator("location", mode="before")
    @classmethod
    def _location(cls, value: Any) -> Any:
        return _coerce_location(value)

    @field_validator("gender", mode="before")
    @classmethod
    def _gender(cls, value: Any) -> str | None:
        return _normalize_gender(value)

    @field_validator("interests", mode="before")
    @classmethod
    def _interests(cls, value: Any) -> list[str]:
        return _normalize_tags(value)

    def display_fields(self) -> dict[str, Any]:
        """Fields a presentation layer shows next to a match."""
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender,
            "profile_image": self.profile_image,
        }


class AgeRange(BaseModel):
    """Inclusive desired age range. `min > max` is tolerated and simply matches nobody."""

    min: int = 18
    max: int = 100

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError("age_range must be a [min, max] pair")
            return {"min": data[0], "max": data[1]}
        return data


class Preferences(_CamelModel):
    """Viewer-authored preferences applied when scoring candidates."""

    age_range: AgeRange = Field(default_factory=AgeRange)
    genders: list[str] = Field(default_factory=list)
    location: GeoPoint | None = None
    interests: list[str] = Field(default_factory=list)
    relationship_goals: str | None = None
    lifestyle: Lifestyle | None = None

    @model_validator(mode="before")
    @classmethod
    def _alternate_shapes(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        # `min_age`/`max_age` columns instead of a pair.
        min_age = data.pop("min_age", data.pop("minAge", None))
        max_age = data.pop("max_age", data.pop("maxAge", None))
        if "age_range" not in data and "ageRange" not in data and (min_age is not None or max_age is not None):
            rng: dict[str, int] = {}
            if min_age is not None:
                rng["min"] = min_age
            if max_age is not None:
                rng["max"] = max_age
            data["age_range"] = rng
        # A single gender or a list, under any of the names found in practice.
        if "genders" not in data:
            for key in ("gender", "preferred_gender", "preferredGender"):
                if key in data:
                    data["genders"] = data.pop(key)
                    break
        if "location" not in data and ("latitude" in data or "lat" in data):
            data["location"] = _coerce_location(data)
        # Flat smoking/drinking/exercise columns instead of a nested lifestyle.
        if "lifestyle" not in data:
            flat = {k: data.pop(k) for k in ("smoking", "drinking", "exercise") if k in data}
            if any(v is not None for v in flat.values()):
                data["lifestyle"] = flat
        return data

    @field_validator("genders", mode="before")
    @classmethod
    def _genders(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        elif isinstance(value, (set, frozenset)):
            value = sorted(value, key=str)
        out: list[str] = []
        for g in value:
            norm = _normalize_gender(g)
            if norm and norm not in out:
                out.append(norm)
        return out

    @field_validator("location", mode="before")
    @classmethod
    def _location(cls, value: Any) -> Any:
        return _coerce_location(value)

    @field_validator("interests", mode="before")
    @classmethod
    def _interests(cls, value: Any) -> list[str]:
        return _normalize_tags(value)


class UserRecord(_CamelModel):
    """One entry of a user pool: identity plus optional profile/preferences relations."""

    id: str
    name: str | None = None
    profile: Profile | None = None
    preferences: Preferences | None = None

    @model_validator(mode="before")
    @classmethod
    def _profile_identity(cls, data: Any) -> Any:
        # Profiles stored as a relation usually lack their own id/name.
        if isinstance(data, Mapping) and isinstance(data.get("profile"), Mapping):
            data = dict(data)
            profile = dict(data["profile"])
            profile.setdefault("id", data.get("id"))
            if data.get("name") is not None:
                profile.setdefault("name", data.get("name"))
            data["profile"] = profile
        return data


class MatchResult(BaseModel):
    """One scored candidate: identifier, pass-through display fields, score and reason."""

    candidate_id: str
    display: dict[str, Any] = Field(default_factory=dict)
    score: float = Field(..., ge=0, le=1)
    reason: str = Field(..., min_length=1)
    strategy: str = "heuristic"
    features: dict[str, Any] = Field(default_factory=dict)


class RankingResult(BaseModel):
    """Ranked matches for one viewer plus run metadata."""

    generated_at: datetime
    viewer_id: str
    results: list[MatchResult]
    meta: dict[str, Any] = Field(default_factory=dict)
