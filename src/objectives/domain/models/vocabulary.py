from __future__ import annotations

from enum import Enum


class ActionType(str, Enum):
    FRIPPLE = "fripple"
    PIZZLE = "pizzle"
    JALLY = "jally"


class ContextActionKind(str, Enum):
    LEAVE_LETTER = "leave_letter"
    FRIPPLE = "fripple"
    PIZZLE = "pizzle"
    JALLY = "jally"
    MOOTITI = "mootiti"


class SomeoneType(str, Enum):
    COP = "cop"
    DOG = "dog"
    CAT = "cat"
    KID = "kid"
    ADULT = "adult"
    AZURE_PERSON = "azure_person"
    CRIMSON_PERSON = "crimson_person"
    GOLDEN_PERSON = "golden_person"
    PRISONER = "prisoner"
    ANYONE = "anyone"


class ObjectType(str, Enum):
    RAT = "rat"
    KNIFE = "knife"
    HANDS = "hands"
    LAMP = "lamp"
    FUNNY = "funny"
    BODY_PART = "body_part"


class BodyPart(str, Enum):
    HEAD = "head"
    HEART = "heart"
    ARM = "arm"
    LEG = "leg"
    FUNNIES = "funnies"
    SKIN = "skin"


class Region(str, Enum):
    """Named regions the location classifier can answer membership for."""

    WOODS = "woods"
    DOWNTOWN = "downtown"
    YOUR_HOME = "your_home"
    DOWNLANDS = "downlands"
    UPLANDS = "uplands"
    NEAR_POLICE_STATION = "near_police_station"


class ObjectiveLocation(str, Enum):
    WOODS = "woods"
    DOWNTOWN = "downtown"
    SOMEONE_HOME = "someone_home"
    YOUR_HOME = "your_home"
    NEAR_POLICE = "near_police"


class Race(str, Enum):
    AZURE = "azure"
    CRIMSON = "crimson"
    GOLDEN = "golden"


class Age(str, Enum):
    ADULT = "adult"
    CHILD = "child"


class EntityKind(str, Enum):
    HUMAN = "human"
    DOG = "dog"
    CAT = "cat"
    RAT = "rat"


ACTION_NAMES = {
    ActionType.FRIPPLE.value: "Fripple",
    ActionType.PIZZLE.value: "Pizzle",
    ActionType.JALLY.value: "Jally",
}

SOMEONE_NAMES = {
    SomeoneType.COP.value: "a cop",
    SomeoneType.DOG.value: "a dog",
    SomeoneType.CAT.value: "a cat",
    SomeoneType.KID.value: "a small humanoid",
    SomeoneType.ADULT.value: "a big humanoid",
    SomeoneType.AZURE_PERSON.value: "a big azure humanoid",
    SomeoneType.CRIMSON_PERSON.value: "a big crimson humanoid",
    SomeoneType.GOLDEN_PERSON.value: "a big golden humanoid",
    SomeoneType.PRISONER.value: "a prisoner",
    SomeoneType.ANYONE.value: "someone",
}

OBJECT_NAMES = {
    ObjectType.RAT.value: "a rat",
    ObjectType.KNIFE.value: "a knife",
    ObjectType.HANDS.value: "your hands",
    ObjectType.LAMP.value: "a lamp",
    ObjectType.FUNNY.value: "their funnies",
    ObjectType.BODY_PART.value: "a body part",
}

BODY_PART_NAMES = {
    BodyPart.HEAD.value: "head",
    BodyPart.HEART.value: "heart",
    BodyPart.ARM.value: "arm",
    BodyPart.LEG.value: "leg",
    BodyPart.FUNNIES.value: "funnies",
    BodyPart.SKIN.value: "skin",
}

LOCATION_NAMES = {
    ObjectiveLocation.WOODS.value: "the woods",
    ObjectiveLocation.DOWNTOWN.value: "a downtown alley",
    ObjectiveLocation.SOMEONE_HOME.value: "someone else's home",
    ObjectiveLocation.YOUR_HOME.value: "your home",
    ObjectiveLocation.NEAR_POLICE.value: "near the police station",
}

# someone_home has no fixed region; it is resolved per position.
LOCATION_REGIONS = {
    ObjectiveLocation.WOODS.value: Region.WOODS,
    ObjectiveLocation.DOWNTOWN.value: Region.DOWNTOWN,
    ObjectiveLocation.YOUR_HOME.value: Region.YOUR_HOME,
    ObjectiveLocation.NEAR_POLICE.value: Region.NEAR_POLICE_STATION,
}


def _key(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value or "")


def action_name(value) -> str:
    return ACTION_NAMES.get(_key(value), "act on")


def someone_name(value) -> str:
    return SOMEONE_NAMES.get(_key(value), "someone")


def object_name(value) -> str:
    return OBJECT_NAMES.get(_key(value), "an object")


def body_part_name(value) -> str:
    return BODY_PART_NAMES.get(_key(value), "body part")


def location_name(value) -> str:
    return LOCATION_NAMES.get(_key(value), "somewhere")


def region_for_location(value) -> Region | None:
    return LOCATION_REGIONS.get(_key(value))
