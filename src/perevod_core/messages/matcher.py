"""
Argument role matching.

Maps the actual arguments of a call onto the configured role slots. Calls
are variadic and optional arguments may be left out, so the matcher reads
the literal shape of each argument to decide which role it fills.

Matching walks slots and arguments in lockstep. The first argument that
does not fit its slot cuts the walk off: no later role is assigned, even
if a later argument would fit. With fallback enabled, an argument that
does not fit may instead be offered to the following slots, which lets a
call omit an optional argument and move the rest of its arguments one
position down.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Dict, FrozenSet, Optional, Sequence, Tuple

import structlog

from .models import ArgumentKind, ArgumentRole, LiteralArgument
from .options import ArgumentMapping, CommentOptions, Slot, SlotType

logger = structlog.get_logger(__name__)

RoleAssignment = Dict[ArgumentRole, LiteralArgument]

TEXT_KINDS: FrozenSet[ArgumentKind] = frozenset({ArgumentKind.TEXT_LITERAL})
OPTIONAL_TEXT_KINDS: FrozenSet[ArgumentKind] = frozenset(
    {ArgumentKind.TEXT_LITERAL, ArgumentKind.OMITTED}
)
ANY_COMMENT_KINDS: FrozenSet[ArgumentKind] = frozenset(
    {ArgumentKind.TEXT_LITERAL, ArgumentKind.STRUCTURED, ArgumentKind.OMITTED}
)


class ArgumentRoleMatcher:
    """
    Resolves which call argument fills each configured role.

    The matcher is built once per extractor and holds only read-only
    configuration, so it can be reused for any number of calls.

    Accepted argument kinds per role:
        - text: text literal
        - textPlural, context: text literal or omitted marker
        - comments: text literal or omitted marker without comment options;
          text literal, structured or omitted marker with comment options

    Fallback only changes what happens after a rejection, never which
    arguments a role accepts.

    Example:
        >>> mapping = ArgumentMapping(text=0, textPlural=1, comments=2, context=3)
        >>> matcher = ArgumentRoleMatcher(mapping, CommentOptions(fallback=True))
        >>> result = matcher.match(["Foo", {"comment": "No Plural here."}])
        >>> sorted(role.value for role in result)
        ['comments', 'text']
    """

    def __init__(
        self,
        mapping: ArgumentMapping,
        comment_options: Optional[CommentOptions] = None,
    ) -> None:
        self._slots = mapping.slot_sequence()
        self._fallback = comment_options is not None and comment_options.fallback

        comment_kinds = OPTIONAL_TEXT_KINDS if comment_options is None else ANY_COMMENT_KINDS

        self._accepted: Dict[ArgumentRole, FrozenSet[ArgumentKind]] = {
            ArgumentRole.TEXT: TEXT_KINDS,
            ArgumentRole.TEXT_PLURAL: OPTIONAL_TEXT_KINDS,
            ArgumentRole.CONTEXT: OPTIONAL_TEXT_KINDS,
            ArgumentRole.COMMENTS: comment_kinds,
        }
        self._log = logger.bind(
            slots=[slot.role.value for slot in self._slots],
            fallback=self._fallback,
        )

    @property
    def slots(self) -> Tuple[Slot, ...]:
        """Configured roles ordered by argument position."""
        return self._slots

    @property
    def fallback(self) -> bool:
        return self._fallback

    def accepts(self, role: ArgumentRole, argument: Optional[LiteralArgument]) -> bool:
        """Return True if ``argument`` has a shape ``role`` can take.

        An absent argument (the call is shorter than the slot position)
        fits no role.
        """
        if argument is None:
            return False
        return argument.kind in self._accepted[role]

    def match(self, call_arguments: Sequence[object]) -> RoleAssignment:
        """
        Assign call arguments to roles.

        Args:
            call_arguments: Arguments of the call, in call order. Items that
                are not LiteralArgument are converted with
                LiteralArgument.from_value().

        Returns:
            Role -> argument for every assigned role. Roles whose argument
            was an omitted marker are left out. The result may lack TEXT,
            in which case the call yields no message.
        """
        arguments = [self._argument_at(call_arguments, slot.position) for slot in self._slots]
        return self._match_slots(self._slots, arguments)

    def _match_slots(
        self,
        slots: Sequence[Slot],
        arguments: Sequence[Optional[LiteralArgument]],
    ) -> RoleAssignment:
        assignment: RoleAssignment = {}

        for index, slot in enumerate(slots):
            argument = arguments[index] if index < len(arguments) else None

            if self.accepts(slot.role, argument):
                if not argument.is_omitted:
                    assignment[slot.role] = argument
                continue

            if self._fallback:
                shifted = self._shift(slots[index:])
                if shifted is not None:
                    self._log.debug(
                        "fallback_shift",
                        skipped_role=slot.role.value,
                        position=slot.position,
                    )
                    assignment.update(self._match_slots(shifted, arguments[index:]))
                    return assignment

            self._log.debug(
                "argument_cutoff",
                role=slot.role.value,
                position=slot.position,
                kind=argument.kind.value if argument is not None else None,
                unassigned=[remaining.role.value for remaining in slots[index:]],
            )
            break

        return assignment

    @staticmethod
    def _shift(slots: Sequence[Slot]) -> Optional[Sequence[Slot]]:
        """Return the slots that remain after skipping the first one.

        Skipping is legal for a comments slot, or for an optional slot
        followed by a comments or optional slot. The text slot is never
        skipped, and the last slot has nothing to shift onto.
        """
        if len(slots) < 2:
            return None

        current, following = slots[0].slot_type, slots[1].slot_type
        if current is SlotType.COMMENTS:
            return slots[1:]
        if current is SlotType.OPTIONAL and following in (SlotType.COMMENTS, SlotType.OPTIONAL):
            return slots[1:]
        return None

    @staticmethod
    def _argument_at(call_arguments: Sequence[object], position: int) -> Optional[LiteralArgument]:
        if position >= len(call_arguments):
            return None
        return LiteralArgument.from_value(call_arguments[position])


__all__ = [
    "ArgumentRoleMatcher",
    "RoleAssignment",
]
