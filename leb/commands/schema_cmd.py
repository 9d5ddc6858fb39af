"""Schema command - prints the adapter protocol JSON Schemas."""

import json

import click

from leb.validator import OutputValidator


def run_schema(validator: OutputValidator, which: str = "all") -> None:
    """Print the adapter input and/or output JSON Schema.

    Args:
        validator: Validator holding the protocol schemas.
        which: "input", "output" or "all".
    """
    if which == "input":
        document = validator.adapter_input_schema()
    elif which == "output":
        document = validator.adapter_output_schema()
    else:
        document = {
            "input": validator.adapter_input_schema(),
            "output": validator.adapter_output_schema(),
        }
    click.echo(json.dumps(document, indent=2))
