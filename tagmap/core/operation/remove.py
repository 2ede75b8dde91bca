import tagmap
import tagmap.core
import tagmap.core.configuration


class _Handler(tagmap.core.configuration.Handler):
    @staticmethod
    def on_apply(
        event: "tagmap.core.configuration.ApplyEvent",
    ):
        event.result = event.tag_map.remove(event.options["key"])


SCHEMA = {
    "remove": {
        "type": "dict",
        "handler": _Handler,
        "schema": {
            "key": {
                "required": True,
                "nullable": False,
                "check_with": "hashable",
            },
        },
    },
}
