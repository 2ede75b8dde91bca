import pathlib
import typing

import cerberus
import mergedeep
from ruamel import yaml
from ruamel.yaml.error import YAMLError


class Error(RuntimeError):
    pass


class InvalidConfigurationError(Error):
    pass


DEFAULTS = {
    "name": "scenario",
    "snapshot": "each",
    "steps": [],
}

SNAPSHOT_EACH = "each"
SNAPSHOT_LAST = "last"
SNAPSHOT_NONE = "none"

SCHEMA = {
    "name": {
        "type": "string",
        "empty": False,
    },
    "snapshot": {
        "type": "string",
        "allowed": [
            SNAPSHOT_EACH,
            SNAPSHOT_LAST,
            SNAPSHOT_NONE,
        ],
    },
    "steps": {
        "type": "list",
        "required": True,
        "schema": {
            "type": "dict",
        },
    },
}


cerberus.Validator.types_mapping["type"] = cerberus.TypeDefinition("type", (type,), ())


class Validator(cerberus.Validator):
    def __init__(self, *args, **kwargs):
        self.handler_details = kwargs.get("handler_details")

        super().__init__(*args, **kwargs)

        if isinstance(self.error_handler, cerberus.errors.ToyErrorHandler):
            self.error_handler = cerberus.errors.BasicErrorHandler()

    def _validate_handler(self, handler, field, value):
        """
        {'type':'type'}
        """
        if (
            self.handler_details is not None
            and not isinstance(self.error_handler, cerberus.errors.ToyErrorHandler)
            and len(self.errors) == 0
        ):
            self.handler_details.append(HandlerDetail(handler, field, value))

    def _check_with_hashable(self, field, value):
        try:
            hash(value)
        except TypeError:
            self._error(field, "must be hashable")


class HandlerDetail:
    def __init__(self, handler, name, options):
        self.__handler = handler
        self.__name = name
        self.__options = options

    @property
    def handler(self) -> typing.Type["Handler"]:
        return self.__handler

    @property
    def name(self) -> str:
        return self.__name

    @property
    def options(self) -> typing.Any:
        return self.__options


def load(path: typing.Union[str, pathlib.Path]) -> typing.Dict[str, typing.Any]:
    path = pathlib.Path(path)

    if not path.is_file():
        raise InvalidConfigurationError("File {} does not exist".format(path))

    try:
        data = yaml.YAML(typ="safe").load(path)
    except YAMLError as error:
        raise InvalidConfigurationError(
            "File {} is not valid YAML: {}".format(path, error)
        ) from error

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigurationError(
            "File {} must contain a mapping".format(path)
        )

    return data


def read(configuration: typing.Mapping[str, typing.Any]) -> typing.Dict[str, typing.Any]:
    if not isinstance(configuration, typing.Mapping):
        raise InvalidConfigurationError("Configuration must be a mapping")

    validator = Validator()

    if not validator.validate(dict(configuration), SCHEMA):
        raise InvalidConfigurationError(validator.errors)

    return mergedeep.merge(
        {},
        DEFAULTS,
        dict(configuration),
        strategy=mergedeep.Strategy.REPLACE,
    )


def read_step(
    schema: typing.Mapping[str, typing.Any],
    step: typing.Mapping[str, typing.Any],
) -> HandlerDetail:
    if not isinstance(step, typing.Mapping) or len(step) != 1:
        raise InvalidConfigurationError(
            "Step {!r} must contain exactly one operation".format(step)
        )

    handler_details: typing.List[HandlerDetail] = []
    validator = Validator(handler_details=handler_details)

    if not validator.validate(dict(step), schema):
        raise InvalidConfigurationError(validator.errors)

    if len(handler_details) != 1:
        raise InvalidConfigurationError(
            "Step {!r} has no known operation".format(step)
        )

    return handler_details[0]


class ApplyEvent:
    def __init__(self, tag_map, options):
        self.__tag_map = tag_map
        self.__options = options
        self.__result = None

    @property
    def tag_map(self) -> "tagmap.core.collection.TagMap":
        return self.__tag_map

    @property
    def options(self):
        return self.__options

    @property
    def result(self):
        return self.__result

    @result.setter
    def result(self, result):
        self.__result = result


class Handler:
    @staticmethod
    def on_apply(event: "ApplyEvent"):
        pass
