import tagmap
import tagmap.core
import tagmap.core.configuration


class _Handler(tagmap.core.configuration.Handler):
    @staticmethod
    def on_apply(
        event: "tagmap.core.configuration.ApplyEvent",
    ):
        event.tag_map.clear()


SCHEMA = {
    "clear": {
        "type": "dict",
        "handler": _Handler,
        "maxlength": 0,
    },
}
