import collections.abc
import logging
import types
import typing

_LOGGER = logging.getLogger(__name__)


class Error(RuntimeError):
    pass


class TagMapError(Error):
    pass


class UnhashableError(TagMapError, TypeError):
    def __init__(self, kind: str, value: typing.Any):
        super().__init__(
            "{} {!r} is not hashable".format(
                kind,
                value,
            )
        )


class InvalidTagsError(TagMapError, TypeError):
    def __init__(self, tags: typing.Any):
        super().__init__(
            "Tags must be an iterable of tags, not {}".format(
                type(tags).__name__,
            )
        )


class KeyNotExistsError(Error, KeyError):
    pass


K = typing.TypeVar("K", bound=typing.Hashable)
T = typing.TypeVar("T", bound=typing.Hashable)
V = typing.TypeVar("V", bound=typing.Hashable)


def _require_hashable(kind: str, value: typing.Any):
    try:
        hash(value)
    except TypeError as error:
        raise UnhashableError(kind, value) from error


def _normalize_tags(
    tags: typing.Optional[typing.Iterable[T]],
) -> typing.FrozenSet[T]:
    if tags is None:
        return frozenset()

    if isinstance(tags, (str, bytes, bytearray)) or not isinstance(
        tags, collections.abc.Iterable
    ):
        raise InvalidTagsError(tags)

    tags = tuple(tags)

    for tag in tags:
        _require_hashable("Tag", tag)

    return frozenset(tags)


class TagMap(typing.Generic[K, T, V]):
    """
    Key-value map where every key additionally carries a set of tags.

    Values can be looked up by key or by any tag that is attached to at
    least one key holding them. Three indices are maintained:

    - key -> value
    - key -> tags
    - tag -> (value -> number of keys contributing the value under the tag)

    Every update removes the previous entry of a key completely before the
    new entry is inserted, so the counts never drift.
    """

    def __init__(self):
        self.__key_values: typing.Dict[K, V] = {}
        self.__key_tags: typing.Dict[K, typing.FrozenSet[T]] = {}
        self.__tag_values: typing.Dict[T, typing.Dict[V, int]] = {}

    def __contains__(self, key: K) -> bool:
        return self.contains_key(key)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> typing.Iterator[K]:
        return iter(self.key_set())

    def __getitem__(self, key: K) -> V:
        if not self.contains_key(key):
            raise KeyNotExistsError(key)

        return self.__key_values[key]

    def __delitem__(self, key: K):
        if not self.contains_key(key):
            raise KeyNotExistsError(key)

        self.remove(key)

    def __repr__(self) -> str:
        return "{}({})".format(
            type(self).__name__,
            ", ".join(
                "{!r}: ({!r}, {!r})".format(
                    key,
                    sorted(self.__key_tags[key], key=repr),
                    value,
                )
                for key, value in self.__key_values.items()
            ),
        )

    def put(
        self,
        key: K,
        tags: typing.Optional[typing.Iterable[T]],
        value: V,
    ) -> typing.Optional[V]:
        """
        Associate key with value and tags.

        An existing entry of key is removed first. Returns the previous
        value of key or None.
        """
        _require_hashable("Key", key)
        _require_hashable("Value", value)
        tag_set = _normalize_tags(tags)

        previous_value = self.remove(key)

        self.__key_values[key] = value
        self.__key_tags[key] = tag_set

        for tag in tag_set:
            counts = self.__tag_values.setdefault(tag, {})
            counts[value] = counts.get(value, 0) + 1

        _LOGGER.debug("Put key %r with %d tag(s)", key, len(tag_set))

        return previous_value

    def replace(
        self,
        key: K,
        tags: typing.Optional[typing.Iterable[T]],
        value: V,
    ) -> typing.Optional[V]:
        """Like put, but only if key is already present."""
        if not self.contains_key(key):
            return None

        return self.put(key, tags, value)

    def remove(self, key: K) -> typing.Optional[V]:
        if not self.contains_key(key):
            return None

        value = self.__key_values.pop(key)
        tag_set = self.__key_tags.pop(key)

        for tag in tag_set:
            counts = self.__tag_values[tag]

            if counts[value] > 1:
                counts[value] -= 1
            else:
                del counts[value]

            if len(counts) == 0:
                del self.__tag_values[tag]

        _LOGGER.debug("Removed key %r with %d tag(s)", key, len(tag_set))

        return value

    def get_by_key(
        self,
        key: K,
        default: typing.Optional[V] = None,
    ) -> typing.Optional[V]:
        _require_hashable("Key", key)
        return self.__key_values.get(key, default)

    def get_by_tag(self, tag: T) -> typing.Optional[typing.FrozenSet[V]]:
        _require_hashable("Tag", tag)
        counts = self.__tag_values.get(tag)

        if counts is None:
            return None

        return frozenset(counts)

    def get_tags(self, key: K) -> typing.Optional[typing.FrozenSet[T]]:
        _require_hashable("Key", key)
        return self.__key_tags.get(key)

    def contains_key(self, key: K) -> bool:
        _require_hashable("Key", key)
        return key in self.__key_values

    def contains_tag(self, tag: T) -> bool:
        _require_hashable("Tag", tag)
        return tag in self.__tag_values

    def contains_value(self, value: V) -> bool:
        """Unhashable values are never stored, so they are never contained."""
        try:
            hash(value)
        except TypeError:
            return False

        return value in self.__key_values.values()

    def size(self) -> int:
        return len(self.__key_values)

    def is_empty(self) -> bool:
        return self.size() == 0

    def key_set(self) -> typing.KeysView[K]:
        return types.MappingProxyType(self.__key_values).keys()

    def tag_set(self) -> typing.KeysView[T]:
        return types.MappingProxyType(self.__tag_values).keys()

    def values(self) -> typing.ValuesView[V]:
        return types.MappingProxyType(self.__key_values).values()

    def clear(self):
        self.__key_values.clear()
        self.__key_tags.clear()
        self.__tag_values.clear()

        _LOGGER.debug("Cleared all entries")
