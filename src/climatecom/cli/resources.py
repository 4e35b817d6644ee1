"""Resource groups exposed as CLI subcommands.

Each group pairs its list/get API operations with the columns shown by
`list` and the fields shown by `get`.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from climatecom.cli import output
from climatecom.cli.output import Column
from climatecom.core import client
from climatecom.core.config import Settings

ListOperation = Callable[[Settings, int], Awaitable[Any]]
GetOperation = Callable[[Settings, str], Awaitable[Any]]


@dataclass(frozen=True)
class Resource:
    command: str  # subcommand group name, e.g. "fields"
    help: str
    noun: str  # used in progress and help text, e.g. "field"
    plural: str
    id_metavar: str
    title: str  # heading of the `get` detail view
    list_operation: ListOperation
    get_operation: GetOperation
    columns: tuple[Column, ...]
    details: tuple[Column, ...]


ID_COLUMN = Column("id", "ID", output.short_id)

ACTIVITY_COLUMNS = (
    ID_COLUMN,
    Column("fieldName", "Field", output.text),
    Column("crop", "Crop", output.text),
    Column("startTime", "Start", output.date),
    Column("area", "Area (ac)", output.acres),
)

ACTIVITY_DETAILS = (
    Column("id", "ID", output.text),
    Column("fieldName", "Field", output.text),
    Column("crop", "Crop", output.text),
    Column("startTime", "Start", output.timestamp),
    Column("area", "Area", output.area_acres),
)

FIELDS = Resource(
    command="fields",
    help="Manage farm fields",
    noun="field",
    plural="fields",
    id_metavar="field-id",
    title="Field Details",
    list_operation=client.list_fields,
    get_operation=client.get_field,
    columns=(
        ID_COLUMN,
        Column("name", "Name", output.text),
        Column("acres", "Acres", output.acres),
        Column("farmName", "Farm", output.text),
    ),
    details=(
        Column("id", "ID", output.text),
        Column("name", "Name", output.text),
        Column("acres", "Acres", output.area_acres),
        Column("farmName", "Farm", output.text),
    ),
)

FARMS = Resource(
    command="farms",
    help="Manage farms",
    noun="farm",
    plural="farms",
    id_metavar="farm-id",
    title="Farm Details",
    list_operation=client.list_farms,
    get_operation=client.get_farm,
    columns=(
        ID_COLUMN,
        Column("name", "Name", output.text),
        Column("fieldCount", "Fields", output.count),
    ),
    details=(
        Column("id", "ID", output.text),
        Column("name", "Name", output.text),
        Column("fieldCount", "Fields", output.count),
    ),
)

BOUNDARIES = Resource(
    command="boundaries",
    help="Manage field boundaries",
    noun="boundary",
    plural="field boundaries",
    id_metavar="boundary-id",
    title="Boundary Details",
    list_operation=client.list_boundaries,
    get_operation=client.get_boundary,
    columns=(
        ID_COLUMN,
        Column("fieldName", "Field", output.text),
        Column("acres", "Acres", output.acres),
    ),
    details=(
        Column("id", "ID", output.text),
        Column("fieldName", "Field", output.text),
        Column("acres", "Acres", output.area_acres),
    ),
)

HARVEST = Resource(
    command="harvest",
    help="View harvest activities",
    noun="harvest activity",
    plural="harvest activities",
    id_metavar="activity-id",
    title="Harvest Activity",
    list_operation=client.list_harvest_activities,
    get_operation=client.get_harvest_activity,
    columns=ACTIVITY_COLUMNS,
    details=ACTIVITY_DETAILS,
)

PLANTING = Resource(
    command="planting",
    help="View planting activities",
    noun="planting activity",
    plural="planting activities",
    id_metavar="activity-id",
    title="Planting Activity",
    list_operation=client.list_planting_activities,
    get_operation=client.get_planting_activity,
    columns=ACTIVITY_COLUMNS,
    details=ACTIVITY_DETAILS,
)

RESOURCES = {r.command: r for r in (FIELDS, FARMS, BOUNDARIES, HARVEST, PLANTING)}
