from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional, Sequence, TypeVar

from objectives.application.services.balance_tables import (
    FALLBACK_OBJECTIVE_DESCRIPTION,
    FALLBACK_OBJECTIVE_TITLE,
    FALLBACK_OBJECTIVE_XP,
    KILLS_IN_SAME_HOME_TARGET,
    penalty_text,
    reward_text,
)
from objectives.domain.collaborators import WorldState
from objectives.domain.models.objective import GeneratedContent, ObjectiveTemplate, Step
from objectives.domain.models.vocabulary import (
    ActionType,
    BodyPart,
    ObjectType,
    ObjectiveLocation,
    SomeoneType,
    action_name,
    body_part_name,
    location_name,
    object_name,
    someone_name,
)

T = TypeVar("T")

_ACTIONS = tuple(item.value for item in ActionType)
_SOMEONE_ALL = tuple(item.value for item in SomeoneType)
_SOMEONE_NOT_PRISONER = tuple(value for value in _SOMEONE_ALL if value != SomeoneType.PRISONER.value)
_SOMEONE_NOT_COP_OR_PRISONER = tuple(
    value for value in _SOMEONE_ALL if value not in {SomeoneType.COP.value, SomeoneType.PRISONER.value}
)
_OBJECTS = tuple(item.value for item in ObjectType)
_BODY_PARTS = tuple(item.value for item in BodyPart)
_LOCATIONS_PUBLIC = (
    ObjectiveLocation.WOODS.value,
    ObjectiveLocation.DOWNTOWN.value,
    ObjectiveLocation.NEAR_POLICE.value,
)
_RACES = (
    SomeoneType.AZURE_PERSON.value,
    SomeoneType.CRIMSON_PERSON.value,
    SomeoneType.GOLDEN_PERSON.value,
)

RANDOM_POOLS = {
    "actions": _ACTIONS,
    "someone_all": _SOMEONE_ALL,
    "someone_not_prisoner": _SOMEONE_NOT_PRISONER,
    "someone_not_cop_or_prisoner": _SOMEONE_NOT_COP_OR_PRISONER,
    "objects": _OBJECTS,
    "body_parts": _BODY_PARTS,
    "locations_public": _LOCATIONS_PUBLIC,
    "races": _RACES,
}


def pick_random(rng: random.Random, pool: Sequence[T]) -> T:
    return pool[rng.randrange(len(pool))]


def _steps(*rows: tuple[str, str]) -> tuple[Step, ...]:
    return tuple(Step(id=step_id, text=text) for step_id, text in rows)


def _highlight_for(location: str) -> Optional[str]:
    if location == ObjectiveLocation.SOMEONE_HOME.value:
        return None
    return location


def _kill_action_corpse_their_home(rng: random.Random) -> GeneratedContent:
    action = pick_random(rng, _ACTIONS)
    someone = pick_random(rng, _SOMEONE_ALL)
    return GeneratedContent(
        title=f"Kill & {action_name(action)} in Their Home",
        description=(
            f"Kill {someone_name(someone)} and {action} their corpse within their own home. Leave your mark."
        ),
        xp=8,
        action=action,
        target_type=someone,
        steps=_steps(
            ("kill", f"Kill {someone_name(someone)} in their home"),
            ("action", f"{action_name(action)} the corpse"),
        ),
    )


def _lure_action_kill(rng: random.Random) -> GeneratedContent:
    someone = pick_random(rng, _SOMEONE_NOT_COP_OR_PRISONER)
    action = pick_random(rng, _ACTIONS)
    return GeneratedContent(
        title=f"Lure, {action_name(action)}, Kill",
        description=(
            f"Convince {someone_name(someone)} to follow you home. "
            f"{action_name(action)} them, then end their life."
        ),
        xp=10,
        action=action,
        target_type=someone,
        highlight_location=ObjectiveLocation.YOUR_HOME.value,
        steps=_steps(
            ("lure", f"Lure {someone_name(someone)} to your home"),
            ("action", f"{action_name(action)} them"),
            ("kill", "Kill them"),
        ),
    )


def _lure_imprison(rng: random.Random) -> GeneratedContent:
    someone = pick_random(rng, _SOMEONE_NOT_COP_OR_PRISONER)
    return GeneratedContent(
        title=f"New Guest: {someone_name(someone)}",
        description=(
            f"Lure {someone_name(someone)} into your home and place them in a cage. They'll be staying a while."
        ),
        xp=8,
        target_type=someone,
        highlight_location=ObjectiveLocation.YOUR_HOME.value,
        steps=_steps(
            ("lure", f"Lure {someone_name(someone)} to your home"),
            ("imprison", "Place them in a cage"),
        ),
    )


def _cook_gift_bodypart(rng: random.Random) -> GeneratedContent:
    body_part = pick_random(rng, _BODY_PARTS)
    someone = pick_random(rng, _SOMEONE_NOT_COP_OR_PRISONER)
    part = body_part_name(body_part)
    return GeneratedContent(
        title=f"Chef's Special: {part}",
        description=(
            f'Prepare a cooked {part} and gift this "delicacy" to {someone_name(someone)}. Share your passion.'
        ),
        xp=10,
        body_part=body_part,
        target_type=someone,
        steps=_steps(
            ("cook", f"Cook a {part}"),
            ("gift", f"Gift it to {someone_name(someone)}"),
        ),
    )


def _cook_eat_bodypart(rng: random.Random) -> GeneratedContent:
    body_part = pick_random(rng, _BODY_PARTS)
    part = body_part_name(body_part)
    return GeneratedContent(
        title=f"Taste of {part}",
        description=f"Cook a {part} and consume it yourself. Become one with your work.",
        xp=6,
        body_part=body_part,
        steps=_steps(
            ("cook", f"Cook a {part}"),
            ("eat", "Eat it"),
        ),
    )


def _kiss_mother(_rng: random.Random) -> GeneratedContent:
    return GeneratedContent(
        title="Kiss Mother Goodnight",
        description="Return home and kiss mother. She's always there for you.",
        xp=2,
        highlight_location=ObjectiveLocation.YOUR_HOME.value,
    )


def _mootiti_corpse_object(rng: random.Random) -> GeneratedContent:
    object_type = pick_random(rng, _OBJECTS)
    return GeneratedContent(
        title=f"Mootiti with {object_name(object_type)}",
        description=f"Use {object_name(object_type)} to mootiti a corpse.",
        xp=5,
        object_type=object_type,
    )


def _leave_corpse_location(rng: random.Random) -> GeneratedContent:
    location = pick_random(rng, _LOCATIONS_PUBLIC)
    return GeneratedContent(
        title=f"Display in {location_name(location)}",
        description=f"Leave a corpse in {location_name(location)} for discovery. Let them know you exist.",
        xp=6,
        location=location,
        highlight_location=_highlight_for(location),
    )


def _perform_ritual(_rng: random.Random) -> GeneratedContent:
    return GeneratedContent(
        title="The Ritual Calls",
        description="Perform a sacrifice at the ritual site marked on your map. The voices demand tribute.",
        xp=5,
        highlight_ritual_site=True,
    )


def _feed_prisoner_bodypart(rng: random.Random) -> GeneratedContent:
    body_part = pick_random(rng, _BODY_PARTS)
    part = body_part_name(body_part)
    return GeneratedContent(
        title=f"Feed Them {part}",
        description=f"Force-feed a prisoner a {part}. Watch their despair grow.",
        xp=7,
        body_part=body_part,
    )


def _kill_prisoner(_rng: random.Random) -> GeneratedContent:
    return GeneratedContent(
        title="End Their Misery",
        description="Kill one of your prisoners. Their time has come.",
        xp=4,
    )


def _kill_in_home_action_corpse(rng: random.Random) -> GeneratedContent:
    someone = pick_random(rng, _RACES)
    action = pick_random(rng, _ACTIONS)
    return GeneratedContent(
        title=f"House Call: {action_name(action)}",
        description=(
            f"Find {someone_name(someone)} at home, kill them there and {action} what is left. "
            "The colour of their skin is the point."
        ),
        xp=9,
        action=action,
        target_type=someone,
        steps=_steps(
            ("kill", f"Kill {someone_name(someone)} in their home"),
            ("action", f"{action_name(action)} the corpse"),
        ),
    )


def _kill_store_in_your_home(rng: random.Random) -> GeneratedContent:
    someone = pick_random(rng, _SOMEONE_NOT_PRISONER)
    return GeneratedContent(
        title="Take Your Work Home",
        description=(
            f"Kill {someone_name(someone)} in their own home, then carry the body back and store it in yours."
        ),
        xp=9,
        target_type=someone,
        highlight_location=ObjectiveLocation.YOUR_HOME.value,
        steps=_steps(
            ("kill", f"Kill {someone_name(someone)} in their home"),
            ("store", "Store the corpse in your home"),
        ),
    )


def _kill_decorate_with_bodypart(rng: random.Random) -> GeneratedContent:
    someone = pick_random(rng, _SOMEONE_NOT_PRISONER)
    body_part = pick_random(rng, _BODY_PARTS)
    part = body_part_name(body_part)
    return GeneratedContent(
        title=f"Interior Design: {part}",
        description=f"Kill {someone_name(someone)} in their home and take their {part} as decoration.",
        xp=9,
        target_type=someone,
        body_part=body_part,
        steps=_steps(
            ("kill", f"Kill {someone_name(someone)} in their home"),
            ("remove", f"Remove the {part}"),
        ),
    )


def _lure_ritual_sacrifice(rng: random.Random) -> GeneratedContent:
    someone = pick_random(rng, _SOMEONE_NOT_COP_OR_PRISONER)
    return GeneratedContent(
        title="A Willing Offering",
        description=(
            f"Lead {someone_name(someone)} to the ritual site, kill them there and complete the sacrifice."
        ),
        xp=12,
        target_type=someone,
        highlight_ritual_site=True,
        steps=_steps(
            ("lure", f"Lure {someone_name(someone)} to the ritual site"),
            ("kill", "Kill them at the site"),
            ("ritual", "Perform the ritual"),
        ),
    )


def _lure_location_kill_action(rng: random.Random) -> GeneratedContent:
    someone = pick_random(rng, _SOMEONE_NOT_COP_OR_PRISONER)
    location = pick_random(rng, _LOCATIONS_PUBLIC)
    action = pick_random(rng, _ACTIONS)
    return GeneratedContent(
        title=f"Field Trip to {location_name(location)}",
        description=(
            f"Get {someone_name(someone)} to follow you to {location_name(location)}. "
            f"Kill them there and {action} the corpse."
        ),
        xp=11,
        action=action,
        target_type=someone,
        location=location,
        highlight_location=_highlight_for(location),
        steps=_steps(
            ("lure", f"Lure {someone_name(someone)} to {location_name(location)}"),
            ("kill", "Kill them there"),
            ("action", f"{action_name(action)} the corpse"),
        ),
    )


def _skin_and_wear(_rng: random.Random) -> GeneratedContent:
    return GeneratedContent(
        title="A New Coat",
        description="Kill one of your prisoners, skin them and wear the result.",
        xp=9,
        steps=_steps(
            ("kill", "Kill a prisoner"),
            ("skin", "Remove their skin"),
            ("wear", "Wear it"),
        ),
    )


def _kill_three_same_home(_rng: random.Random) -> GeneratedContent:
    return GeneratedContent(
        title="Family Dinner",
        description=(
            f"Kill {KILLS_IN_SAME_HOME_TARGET} people inside the same home. Leaving resets the count."
        ),
        xp=12,
    )


def _remove_feed_prisoner(rng: random.Random) -> GeneratedContent:
    body_part = pick_random(rng, _BODY_PARTS)
    part = body_part_name(body_part)
    return GeneratedContent(
        title=f"Eat Your {part}",
        description=f"Remove a prisoner's {part} and feed it back to them.",
        xp=8,
        body_part=body_part,
        steps=_steps(
            ("remove", f"Remove a prisoner's {part}"),
            ("feed", "Feed it to them"),
        ),
    )


def _eat_prisoner_part(rng: random.Random) -> GeneratedContent:
    body_part = pick_random(rng, _BODY_PARTS)
    part = body_part_name(body_part)
    return GeneratedContent(
        title=f"Fresh {part}",
        description=f"Take a {part} from a living prisoner and eat it.",
        xp=8,
        body_part=body_part,
        steps=_steps(
            ("remove", f"Remove a prisoner's {part}"),
            ("eat", "Eat it"),
        ),
    )


def _feed_dogs_corpse(_rng: random.Random) -> GeneratedContent:
    return GeneratedContent(
        title="Good Boy",
        description="Feed human remains to a dog.",
        xp=5,
    )


def _leave_letter_corpse(rng: random.Random) -> GeneratedContent:
    location = pick_random(rng, _LOCATIONS_PUBLIC)
    return GeneratedContent(
        title="Dear Police",
        description=(
            f"Leave a corpse in {location_name(location)} with a letter pinned to it. They should know your name."
        ),
        xp=7,
        location=location,
        highlight_location=_highlight_for(location),
        steps=_steps(
            ("letter", "Leave a letter on a corpse"),
            ("leave", f"Leave the corpse in {location_name(location)}"),
        ),
    )


DAILY_OBJECTIVE_TEMPLATES: tuple[ObjectiveTemplate, ...] = (
    ObjectiveTemplate(id="kill_action_corpse_their_home", xp=8, generate=_kill_action_corpse_their_home),
    ObjectiveTemplate(id="lure_action_kill", xp=10, generate=_lure_action_kill),
    ObjectiveTemplate(id="lure_imprison", xp=8, generate=_lure_imprison),
    ObjectiveTemplate(id="cook_gift_bodypart", xp=10, generate=_cook_gift_bodypart),
    ObjectiveTemplate(id="cook_eat_bodypart", xp=6, generate=_cook_eat_bodypart),
    ObjectiveTemplate(id="kiss_mother", xp=2, generate=_kiss_mother),
    ObjectiveTemplate(id="mootiti_corpse_object", xp=5, generate=_mootiti_corpse_object),
    ObjectiveTemplate(id="leave_corpse_location", xp=6, generate=_leave_corpse_location),
    ObjectiveTemplate(id="perform_ritual", xp=5, generate=_perform_ritual),
    ObjectiveTemplate(id="feed_prisoner_bodypart", xp=7, requires_prisoner=True, generate=_feed_prisoner_bodypart),
    ObjectiveTemplate(id="kill_prisoner", xp=4, requires_prisoner=True, generate=_kill_prisoner),
    ObjectiveTemplate(id="kill_in_home_action_corpse", xp=9, generate=_kill_in_home_action_corpse),
    ObjectiveTemplate(id="kill_store_in_your_home", xp=9, generate=_kill_store_in_your_home),
    ObjectiveTemplate(id="kill_decorate_with_bodypart", xp=9, generate=_kill_decorate_with_bodypart),
    ObjectiveTemplate(id="lure_ritual_sacrifice", xp=12, generate=_lure_ritual_sacrifice),
    ObjectiveTemplate(id="lure_location_kill_action", xp=11, generate=_lure_location_kill_action),
    ObjectiveTemplate(id="skin_and_wear", xp=9, requires_prisoner=True, generate=_skin_and_wear),
    ObjectiveTemplate(id="kill_three_same_home", xp=12, generate=_kill_three_same_home),
    ObjectiveTemplate(id="remove_feed_prisoner", xp=8, requires_prisoner=True, generate=_remove_feed_prisoner),
    ObjectiveTemplate(id="eat_prisoner_part", xp=8, requires_prisoner=True, generate=_eat_prisoner_part),
    ObjectiveTemplate(id="feed_dogs_corpse", xp=5, generate=_feed_dogs_corpse),
    ObjectiveTemplate(id="leave_letter_corpse", xp=7, generate=_leave_letter_corpse),
)


def fallback_content() -> GeneratedContent:
    return GeneratedContent(
        title=FALLBACK_OBJECTIVE_TITLE,
        description=FALLBACK_OBJECTIVE_DESCRIPTION,
        xp=FALLBACK_OBJECTIVE_XP,
        reward_text=reward_text(FALLBACK_OBJECTIVE_XP),
        penalty_text=penalty_text(),
    )


class TemplateBank:
    def __init__(
        self,
        templates: Sequence[ObjectiveTemplate] = DAILY_OBJECTIVE_TEMPLATES,
        rng: random.Random | None = None,
    ) -> None:
        self._templates = tuple(templates)
        self._rng = rng or random.Random()
        self._logger = logging.getLogger(__name__)

    @property
    def templates(self) -> tuple[ObjectiveTemplate, ...]:
        return self._templates

    def get_template(self, template_id: str) -> ObjectiveTemplate | None:
        for template in self._templates:
            if template.id == template_id:
                return template
        return None

    def list_eligible(self, world_state: WorldState | None) -> list[ObjectiveTemplate]:
        has_prisoner = bool(world_state is not None and world_state.has_prisoner_available())
        return [template for template in self._templates if not template.requires_prisoner or has_prisoner]

    def instantiate(self, template: ObjectiveTemplate, rng: random.Random | None = None) -> GeneratedContent:
        generated = template.generate(rng or self._rng)
        return replace(
            generated,
            template_id=template.id,
            requires_prisoner=bool(template.requires_prisoner),
            reward_text=reward_text(generated.xp),
            penalty_text=penalty_text(),
        )

    def pick_daily_objective(
        self,
        world_state: WorldState | None,
        rng: random.Random | None = None,
    ) -> GeneratedContent:
        rng = rng or self._rng
        eligible = self.list_eligible(world_state)
        if not eligible:
            self._logger.info("No eligible objective templates; using fallback content")
            return fallback_content()

        template = pick_random(rng, eligible)
        return self.instantiate(template, rng)
