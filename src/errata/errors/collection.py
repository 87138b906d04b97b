"""
Attribute-keyed error collection with deduplicated insertion and merging.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from ..config import ErrataConfig, get_config
from ..core.subject import Subject
from ..exceptions import ErrataError, ErrorKind
from ..utils.logging import get_logger, merge_scope
from ..utils.naming import humanize
from .entries import (
    BASE,
    Detail,
    FailureEntry,
    HasDetails,
    check_attribute,
    check_code,
    check_options,
)
from .messages import generate_message

logger = get_logger("errors")

FullMessageFormatter = Callable[[str, str], str]


class Errors:
    """
    Ordered mapping of attribute name to failure entries, bound to one subject.

    Entries are appended in insertion order and never duplicated. Two entries
    collide on message text whenever either of them is message-only; two
    detailed entries collide when code, options and message all match. The
    entry already stored wins.
    """

    def __init__(
        self,
        subject: Any,
        *,
        full_message: Optional[FullMessageFormatter] = None,
        config: Optional[ErrataConfig] = None,
    ) -> None:
        self._subject = subject
        self._full_message = full_message
        self._config = config
        self._entries: Dict[str, List[FailureEntry]] = {}

    def __repr__(self) -> str:
        return f"<Errors {self.messages!r}>"

    @property
    def subject(self) -> Any:
        return self._subject

    @property
    def config(self) -> ErrataConfig:
        return self._config or get_config()

    # Insertion -----------------------------------------------------------
    def add(
        self,
        attribute: str,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> FailureEntry:
        """
        Record a failure for ``attribute`` unless an equivalent one exists.

        ``errors.add("name", "is taken")`` stores a message-only entry;
        ``errors.add("name", code="too_short", options={"count": 3})`` stores
        a detailed entry whose message is generated from the code unless
        ``message`` (or ``options["message"]``) supplies one. Returns the
        stored entry, or the existing equivalent.
        """

        attribute = check_attribute(attribute)
        entry = self._build_entry(message, code, options)
        for existing in self._entries.get(attribute, ()):
            if _same_entry(existing, entry):
                return existing
        self._entries.setdefault(attribute, []).append(entry)
        return entry

    def added(
        self,
        attribute: str,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """
        Check for an existing entry. A detailed probe without a message
        matches on code and options alone.
        """

        attribute = check_attribute(attribute)
        entries = self._entries.get(attribute, ())
        if code is None:
            if message is None:
                raise ErrataError(ErrorKind.INVALID_DETAIL, "added() needs a message or an error code")
            return any(entry.message == message for entry in entries)

        code = check_code(code)
        opts = check_options(options)
        wanted = opts.pop("message", None) if message is None else message
        opts.pop("message", None)
        return any(
            entry.detail is not None
            and entry.detail.matches(code, opts)
            and (wanted is None or entry.message == wanted)
            for entry in entries
        )

    def _build_entry(
        self,
        message: Optional[str],
        code: Optional[str],
        options: Optional[Mapping[str, Any]],
    ) -> FailureEntry:
        if code is None:
            if options:
                raise ErrataError(
                    ErrorKind.INVALID_DETAIL, "Detail options require an error code"
                )
            if message is None:
                raise ErrataError(ErrorKind.INVALID_DETAIL, "add() needs a message or an error code")
            return FailureEntry(message)

        code = check_code(code)
        opts = check_options(options)
        option_message = opts.pop("message", None)
        if message is None:
            message = option_message
        if message is None:
            message = generate_message(code, opts)
        return FailureEntry(message, Detail(code, opts))

    # Merging -------------------------------------------------------------
    def merge(self, other: Any, move: Optional[Mapping[str, str]] = None) -> "Errors":
        """
        Merge ``other`` into this collection and return ``self``.

        ``other`` may be another :class:`Errors`, anything exposing aligned
        ``messages`` and ``details`` (see :class:`HasDetails`), or a plain
        mapping of attribute to messages. ``move`` renames source attributes;
        attributes absent from it keep their name.

        An entry whose destination is ``base`` while its source is not, or
        whose destination is not an attribute of the subject, is folded into
        ``base`` as a full message. Entries that already live on ``base`` are
        never re-wrapped.
        """

        moves = _check_moves(move)
        incoming = list(_iter_incoming(other))
        demoted = 0
        with merge_scope():
            for source, entry in incoming:
                target = moves[source] if source in moves else source
                if self._merge_entry(source, target, entry):
                    demoted += 1
            logger.debug(
                "Merged %d entries (%d folded into %s)", len(incoming), demoted, BASE
            )
        return self

    def _merge_entry(self, source: str, target: str, entry: FailureEntry) -> bool:
        attribute, message, demoted = self._resolve_target(source, target, entry.message)
        if entry.detail is not None and not demoted:
            options = dict(entry.detail.options)
            options["message"] = message
            self.add(attribute, code=entry.detail.code, options=options)
        else:
            self.add(attribute, message)
        return demoted

    def _resolve_target(self, source: str, target: str, message: str) -> Tuple[str, str, bool]:
        if target == BASE:
            if source == BASE:
                return BASE, message, False
            logger.debug("Folding '%s' error into %s", source, BASE)
            return BASE, self.full_message(source, message), True
        if self.is_recognized_attribute(target):
            return target, message, False
        logger.debug("Folding unknown attribute '%s' into %s", target, BASE)
        return BASE, self.full_message(target, message), True

    # Subject queries -----------------------------------------------------
    def is_recognized_attribute(self, name: str) -> bool:
        if isinstance(self._subject, Subject):
            return bool(self._subject.has_attribute(name))
        return hasattr(self._subject, name)

    def human_attribute_name(self, attribute: str) -> str:
        namer = getattr(self._subject, "human_attribute_name", None)
        if callable(namer):
            return namer(attribute)
        return humanize(attribute)

    def full_message(self, attribute: str, message: str) -> str:
        if attribute == BASE:
            return message
        if self._full_message is not None:
            return self._full_message(attribute, message)
        return self.config.full_message_format.format(
            attribute=self.human_attribute_name(attribute), message=message
        )

    # Read access ---------------------------------------------------------
    @property
    def messages(self) -> Dict[str, List[str]]:
        return {
            attribute: [entry.message for entry in entries]
            for attribute, entries in self._entries.items()
            if entries
        }

    @property
    def details(self) -> Dict[str, List[Optional[Detail]]]:
        return {
            attribute: [entry.detail for entry in entries]
            for attribute, entries in self._entries.items()
            if entries
        }

    def entries_for(self, attribute: str) -> List[FailureEntry]:
        return list(self._entries.get(attribute, ()))

    def messages_for(self, attribute: str) -> List[str]:
        return [entry.message for entry in self._entries.get(attribute, ())]

    __getitem__ = messages_for

    def full_messages_for(self, attribute: str) -> List[str]:
        return [self.full_message(attribute, message) for message in self.messages_for(attribute)]

    def full_messages(self) -> List[str]:
        return [self.full_message(attribute, entry.message) for attribute, entry in self]

    def of_kind(self, attribute: str, code: str = "invalid") -> bool:
        return any(entry.code == code for entry in self._entries.get(attribute, ()))

    def attribute_names(self) -> List[str]:
        return [attribute for attribute, entries in self._entries.items() if entries]

    def to_dict(self, full_messages: bool = False) -> Dict[str, List[str]]:
        if not full_messages:
            return self.messages
        return {attribute: self.full_messages_for(attribute) for attribute in self.attribute_names()}

    def copy(self) -> "Errors":
        clone = Errors(self._subject, full_message=self._full_message, config=self._config)
        clone._entries = {attribute: list(entries) for attribute, entries in self._entries.items()}
        return clone

    # Mutation ------------------------------------------------------------
    def delete(self, attribute: str) -> List[str]:
        removed = self._entries.pop(attribute, [])
        return [entry.message for entry in removed]

    def clear(self) -> None:
        self._entries.clear()

    # Container protocol --------------------------------------------------
    def __iter__(self) -> Iterator[Tuple[str, FailureEntry]]:
        for attribute, entries in list(self._entries.items()):
            for entry in list(entries):
                yield attribute, entry

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __contains__(self, attribute: object) -> bool:
        return bool(self._entries.get(attribute)) if isinstance(attribute, str) else False


def _same_entry(existing: FailureEntry, entry: FailureEntry) -> bool:
    # A message-only entry on either side collides on message text alone.
    if entry.detail is None or existing.detail is None:
        return existing.message == entry.message
    return existing.detail == entry.detail and existing.message == entry.message


def _check_moves(move: Optional[Mapping[str, str]]) -> Dict[str, str]:
    if move is None:
        return {}
    if not isinstance(move, Mapping):
        raise ErrataError(
            ErrorKind.INVALID_MOVE, f"Move maps must be mappings, got {type(move).__name__}"
        )
    for source, target in move.items():
        if not isinstance(source, str) or not isinstance(target, str) or not target:
            raise ErrataError(
                ErrorKind.INVALID_MOVE,
                f"Move map entries must map attribute names to attribute names, got {source!r}: {target!r}",
            )
    return dict(move)


def _coerce_detail(detail: Any, message: str) -> Optional[Detail]:
    if detail is None or isinstance(detail, Detail):
        return detail
    if not isinstance(detail, Mapping):
        raise ErrataError(
            ErrorKind.INVALID_DETAIL, f"Details must be Detail objects or mappings, got {detail!r}"
        )
    options = dict(detail)
    code = options.pop("error", None)
    # Message-only errors report their own text as the error.
    if code is None or code == message:
        return None
    options.pop("message", None)
    return Detail(code, options)


def _iter_incoming(other: Any) -> Iterator[Tuple[str, FailureEntry]]:
    if isinstance(other, Errors):
        yield from other
        return

    if isinstance(other, HasDetails):
        details = other.details
        for attribute, messages in other.messages.items():
            attribute = check_attribute(attribute)
            attribute_details = list(details.get(attribute, ()))
            for index, message in enumerate(messages):
                detail = attribute_details[index] if index < len(attribute_details) else None
                yield attribute, FailureEntry(message, _coerce_detail(detail, message))
        return

    if isinstance(other, Mapping):
        for attribute, messages in other.items():
            attribute = check_attribute(attribute)
            if isinstance(messages, str):
                messages = [messages]
            for message in messages:
                yield attribute, FailureEntry(message)
        return

    raise ErrataError(
        ErrorKind.PROGRAMMER,
        f"Cannot merge errors from {type(other).__name__}; expected Errors or a mapping",
    )
