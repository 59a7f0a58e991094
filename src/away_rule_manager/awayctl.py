"""Away rule CLI entrypoint.

Builds command envelopes offline and renders saved get_rules responses.
Delivering the envelopes to a device is left to the caller's transport.
"""

import json
import logging
from datetime import time
from pathlib import Path
from typing import Any, List, Optional, Union

import typer
from pydantic import ValidationError
from rich import print, print_json
from rich.table import Table
from typing_extensions import Annotated

from .commands_model import (
    CommandEnvelope,
    EditRuleConfig,
    RuleConfig,
    ScheduleRule,
)
from .config import get_log_level, get_namespace
from .const import MINUTES_PER_DAY, RuleVerb
from .serializers import serialize_schedule_rule

app = typer.Typer(help="Build and inspect away/anti-theft rule commands.")


def _parse_time(value: str) -> Union[int, str, time]:
    """Accept minutes (``1320``), ``HH:MM``, ``24:00``, sunrise or sunset."""
    token = value.strip().lower()
    if token in ("sunrise", "sunset"):
        return token
    if token.isdigit():
        return int(token)
    if token == "24:00":
        return MINUTES_PER_DAY
    try:
        return time.fromisoformat(token)
    except ValueError as exc:
        raise typer.BadParameter(
            f"Invalid time '{value}'. Use minutes, HH:MM, sunrise or sunset"
        ) from exc


def _emit(
    namespace: Optional[str], verb: RuleVerb, params: dict[str, Any]
) -> None:
    envelope = CommandEnvelope(namespace or get_namespace(), verb, params)
    print_json(data=envelope.to_dict())


@app.callback()
def main() -> None:
    """Configure logging from AWAY_RULES_LOG_LEVEL."""
    logging.basicConfig(level=get_log_level())


@app.command()
def add(
    start: Annotated[str, typer.Option(help="Start: minutes, HH:MM or solar")],
    end: Annotated[str, typer.Option(help="End: minutes, HH:MM or solar")],
    day: Annotated[
        Optional[List[int]],
        typer.Option("--day", "-d", help="Weekday index, 0=Sun .. 6=Sat"),
    ] = None,
    name: Annotated[str, typer.Option(help="Rule label")] = "",
    frequency: Annotated[
        Optional[int], typer.Option(help="Check interval in minutes")
    ] = None,
    disable: Annotated[
        bool, typer.Option("--disable", help="Create the rule disabled")
    ] = False,
    rule_id: Annotated[
        Optional[str],
        typer.Option("--id", help="Edit this rule instead of adding one"),
    ] = None,
    namespace: Annotated[Optional[str], typer.Option()] = None,
) -> None:
    """Print the add_rule (or edit_rule with --id) envelope."""
    fields: dict[str, Any] = {
        "start": _parse_time(start),
        "end": _parse_time(end),
        "days_of_week": day or [],
        "name": name,
        "enable": not disable,
    }
    if frequency is not None:
        fields["frequency"] = frequency
    try:
        if rule_id is not None:
            config: RuleConfig = EditRuleConfig(id=rule_id, **fields)
        else:
            config = RuleConfig(**fields)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    verb = RuleVerb.EDIT_RULE if rule_id is not None else RuleVerb.ADD_RULE
    _emit(namespace, verb, config.to_rule_params())


@app.command()
def delete(
    rule_id: Annotated[
        Optional[str], typer.Argument(help="Rule id; omit to delete all")
    ] = None,
    namespace: Annotated[Optional[str], typer.Option()] = None,
) -> None:
    """Print the delete_rule or delete_all_rules envelope."""
    if rule_id is None:
        _emit(namespace, RuleVerb.DELETE_ALL_RULES, {})
    else:
        _emit(namespace, RuleVerb.DELETE_RULE, {"id": rule_id})


@app.command()
def overall(
    enable: Annotated[
        bool, typer.Option("--enable/--disable", help="Feature state")
    ] = True,
    namespace: Annotated[Optional[str], typer.Option()] = None,
) -> None:
    """Print the set_overall_enable envelope."""
    _emit(
        namespace,
        RuleVerb.SET_OVERALL_ENABLE,
        {"enable": 1 if enable else 0},
    )


@app.command()
def rules(
    path: Annotated[
        Path, typer.Argument(help="JSON file holding a get_rules response")
    ],
) -> None:
    """Render a saved get_rules response as a table."""
    try:
        response = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc
    if not isinstance(response, dict):
        raise typer.BadParameter(
            f"{path} does not hold a get_rules response object"
        )

    rule_list = response.get("rule_list") or []
    if not rule_list:
        print(f"No rules (err_code={response.get('err_code')}).")
        return

    table = Table(
        show_header=True, header_style="bold", box=None, pad_edge=False
    )
    table.add_column("id")
    table.add_column("name")
    table.add_column("start")
    table.add_column("end")
    table.add_column("days")
    table.add_column("freq", justify="right")
    table.add_column("enabled")
    for raw in rule_list:
        data = serialize_schedule_rule(ScheduleRule.from_wire(raw))
        table.add_row(
            str(data["id"]),
            data["name"] or "--",
            data["start_label"],
            data["end_label"] or "--",
            ", ".join(data["days"]) or data.get("date", "--"),
            str(data["frequency"]),
            "yes" if data["enable"] else "no",
        )
    print(table)
    print(f"err_code={response.get('err_code')}")


if __name__ == "__main__":
    app()
