import pathlib
import typing

import toolz

import tagmap
import tagmap.core
import tagmap.core.collection
import tagmap.core.configuration
import tagmap.core.operation

DEMO = {
    "name": "demo",
    "snapshot": tagmap.core.configuration.SNAPSHOT_EACH,
    "steps": [
        {"put": {"key": 1, "tags": ["a", "b", "c"], "value": "abc"}},
        {"put": {"key": 2, "tags": ["a", "b"], "value": "abc"}},
        {"put": {"key": 2, "tags": ["a", "c"], "value": "abc"}},
        {"remove": {"key": 1}},
        {"remove": {"key": 2}},
    ],
}


class Snapshot:
    def __init__(
        self,
        keys: typing.Mapping[typing.Any, typing.Any],
        tags: typing.Mapping[typing.Any, typing.FrozenSet[typing.Any]],
    ):
        self.__keys = dict(keys)
        self.__tags = toolz.valmap(frozenset, tags)

    @classmethod
    def of(cls, tag_map: "tagmap.core.collection.TagMap") -> "Snapshot":
        return cls(
            {key: tag_map.get_by_key(key) for key in tag_map.key_set()},
            {tag: tag_map.get_by_tag(tag) for tag in tag_map.tag_set()},
        )

    @property
    def keys(self) -> typing.Dict[typing.Any, typing.Any]:
        return dict(self.__keys)

    @property
    def tags(self) -> typing.Dict[typing.Any, typing.FrozenSet[typing.Any]]:
        return dict(self.__tags)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented

        return self.keys == other.keys and self.tags == other.tags

    def __repr__(self) -> str:
        return "Snapshot(keys={!r}, tags={!r})".format(self.__keys, self.__tags)


class Step:
    def __init__(
        self,
        name: str,
        options: typing.Any,
        result: typing.Any,
        snapshot: typing.Optional[Snapshot],
    ):
        self.__name = name
        self.__options = options
        self.__result = result
        self.__snapshot = snapshot

    @property
    def name(self) -> str:
        return self.__name

    @property
    def options(self) -> typing.Any:
        return self.__options

    @property
    def result(self) -> typing.Any:
        return self.__result

    @property
    def snapshot(self) -> typing.Optional[Snapshot]:
        return self.__snapshot

    def describe(self) -> str:
        if not self.__options:
            return self.__name

        return "{} {}".format(
            self.__name,
            ", ".join(
                "{}={}".format(name, value)
                for name, value in self.__options.items()
            ),
        )


class Scenario:
    """
    Sequence of tagged map operations read from a configuration mapping.

    The configuration is validated on construction, so a Scenario that
    exists can always be run.
    """

    def __init__(self, configuration: typing.Mapping[str, typing.Any]):
        configuration = tagmap.core.configuration.read(configuration)

        self.__name = configuration["name"]
        self.__snapshot_mode = configuration["snapshot"]
        self.__steps = [
            tagmap.core.configuration.read_step(
                tagmap.core.operation.SCHEMA,
                step,
            )
            for step in configuration["steps"]
        ]

    @classmethod
    def load(cls, path: typing.Union[str, pathlib.Path]) -> "Scenario":
        return cls(tagmap.core.configuration.load(path))

    @property
    def name(self) -> str:
        return self.__name

    @property
    def snapshot_mode(self) -> str:
        return self.__snapshot_mode

    @property
    def steps(self) -> typing.List["tagmap.core.configuration.HandlerDetail"]:
        return list(self.__steps)

    def __len__(self) -> int:
        return len(self.__steps)

    def run(
        self,
        tag_map: typing.Optional["tagmap.core.collection.TagMap"] = None,
        snapshot_mode: typing.Optional[str] = None,
    ) -> typing.Iterator[Step]:
        if tag_map is None:
            tag_map = tagmap.core.collection.TagMap()

        if snapshot_mode is None:
            snapshot_mode = self.__snapshot_mode

        last = len(self.__steps) - 1

        for index, detail in enumerate(self.__steps):
            event = tagmap.core.configuration.ApplyEvent(tag_map, detail.options)
            detail.handler.on_apply(event)

            snapshot = None
            if snapshot_mode == tagmap.core.configuration.SNAPSHOT_EACH or (
                snapshot_mode == tagmap.core.configuration.SNAPSHOT_LAST
                and index == last
            ):
                snapshot = Snapshot.of(tag_map)

            yield Step(detail.name, detail.options, event.result, snapshot)
