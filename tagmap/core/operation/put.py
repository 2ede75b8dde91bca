import tagmap
import tagmap.core
import tagmap.core.configuration


class _Handler(tagmap.core.configuration.Handler):
    @staticmethod
    def on_apply(
        event: "tagmap.core.configuration.ApplyEvent",
    ):
        event.result = event.tag_map.put(
            event.options["key"],
            event.options.get("tags"),
            event.options["value"],
        )


SCHEMA = {
    "put": {
        "type": "dict",
        "handler": _Handler,
        "schema": {
            "key": {
                "required": True,
                "nullable": False,
                "check_with": "hashable",
            },
            "tags": {
                "type": "list",
                "nullable": True,
                "schema": {
                    "check_with": "hashable",
                },
            },
            "value": {
                "required": True,
                "nullable": True,
                "check_with": "hashable",
            },
        },
    },
}
