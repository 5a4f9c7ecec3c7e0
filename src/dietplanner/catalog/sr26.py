"""Loader for the USDA SR26 nutrient database (caret-delimited text files).

Download the database from
https://www.ars.usda.gov/SP2UserFiles/Place/12354500/Data/SR26/dnload/sr26.zip
and point ``usda_data_dir`` at the extracted files.
"""

import csv
import re
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path

from dietplanner.catalog.models import (
    Catalog,
    CatalogError,
    CatalogFormatError,
    FoodItem,
    Nutrient,
    NutrientAmount,
)
from dietplanner.logging_config import get_logger

logger = get_logger(__name__)

SR26_DOWNLOAD_URL = "https://www.ars.usda.gov/SP2UserFiles/Place/12354500/Data/SR26/dnload/sr26.zip"

NUTRIENT_DEFINITIONS_FILE = "NUTR_DEF.txt"
FOOD_DESCRIPTIONS_FILE = "FOOD_DES.txt"
NUTRIENT_DATA_FILE = "NUT_DATA.txt"

# =============================================================================
# Filtering Rules
# =============================================================================

# Fatty acid codes such as "18:3 n-3 c,c,c" are dropped unless abbreviated ("(ALA)")
_FATTY_ACID_CODE = re.compile(r"^\d+:\d+")
_ABBREVIATION = re.compile(r"\(\w{3}\)")

# SR26 uses the same description for both energy units
ENERGY_DESCRIPTIONS: dict[int, str] = {
    208: "Energy, kcal",
    268: "Energy, kJ",
}

EXCLUDED_FOOD_GROUPS: frozenset[str] = frozenset(
    {
        "0300",  # baby foods
        "0800",  # breakfast cereals
        "1400",  # beverages
        "2100",  # fast foods
        "3600",  # restaurant foods
    }
)

# Matched against the description as-is
EXCLUDED_DESCRIPTION_MARKERS: tuple[str, ...] = (
    "Lemonade",
    "Ice cream",
    "dehydrated flakes",
    "Alcoholic beverage",
    "freeze-dried",
    "Celery flakes",
    "dehydrated",
    "Candies",
    "Tea,",
    # manufactured, likely to contain additives
    "surimi",
    "MORNINGSTAR",
    "Meat extender",
    "with low-calorie sweeteners",
    "instant breakfast powder",
    "Orange-flavor drink",
    "Fruit-flavored drink",
    "Leavening agents",
    "Reddi Wip",
    "Frozen novelties",
    # added nutrients
    "Formulated bar,",
    "Soy protein isolate",
    "Soy protein concentrate",
    "PAM cooking spray",
    "Seal,",
    # access
    "Egg Mix, USDA Commodity",
    "Game meat",
    "Butterbur, canned",
    # too expensive
    "Spices,",
)

# Matched against the lowercased description
EXCLUDED_DESCRIPTION_MARKERS_LOWER: tuple[str, ...] = (
    # meat
    "beef,",
    "pork,",
    "pork skins,",
    "chicken,",
    "smelt,",
    "salmon,",
    "fish,",
    "mutton,",
    "turkey,",
    "trout,",
    "lamb,",
    "caribou,",
    " meat,",
    # manufactured
    "liver cheese,",
    "big franks,",
    # added nutrients
    " acid,",
    " added ",
    " supplement",
    " fortified",
    " seal,",
    "mollusks",
    # organ meats
    " brain",
    " liver ",
    " liver,",
    " kidney",
    " lungs,",
    " chitterlings",
    " intestine",
    # high-mercury fish
    " mackerel,",
    " marlin,",
    " orange roughy,",
    " shark,",
    " swordfish,",
    " tilefish,",
    " tuna,",
    " bluefish,",
    " grouper,",
    " sea bass",
    " bass,",
    " carp,",
    " cod,",
    " croaker,",
    " halibut,",
    " jacksmelt,",
    " lobster,",
    " mahi mahi,",
    " monkfish,",
    " perch,",
    " sablefish,",
    " skate,",
    " snapper,",
    " weakfish,",
    " whale,",
)

EXCLUDED_MANUFACTURERS: frozenset[str] = frozenset({"Campbell Soup Co."})


def is_excluded_food(food_group: str, description: str, manufacturer: str) -> bool:
    """Check whether a food should be left out of the catalog."""
    if food_group in EXCLUDED_FOOD_GROUPS:
        return True

    if any(marker in description for marker in EXCLUDED_DESCRIPTION_MARKERS):
        return True

    lowered = description.lower()
    if any(marker in lowered for marker in EXCLUDED_DESCRIPTION_MARKERS_LOWER):
        return True

    return manufacturer in EXCLUDED_MANUFACTURERS


def is_kept_nutrient(description: str) -> bool:
    """Fatty acid codes are only kept when they carry an abbreviation."""
    if _FATTY_ACID_CODE.match(description):
        return bool(_ABBREVIATION.search(description))
    return True


# =============================================================================
# Record Parsing
# =============================================================================


def _read_records(path: Path, min_fields: int) -> Iterator[tuple[int, list[str]]]:
    """Yield (line_number, fields) for each record in a caret-delimited file."""
    if not path.exists():
        raise CatalogError(
            f"{path.name} not found in {path.parent}. Download the USDA SR26 database "
            f"from {SR26_DOWNLOAD_URL} and extract it there.",
            path=str(path),
        )

    with path.open(encoding="latin-1", newline="") as handle:
        reader = csv.reader(handle, delimiter="^", quoting=csv.QUOTE_NONE)
        for line_number, fields in enumerate(reader, start=1):
            if not fields:
                continue
            if len(fields) < min_fields:
                raise CatalogFormatError(
                    f"Expected at least {min_fields} fields, got {len(fields)}",
                    path=str(path),
                    line_number=line_number,
                )
            yield line_number, fields


def _text_field(value: str, path: Path, line_number: int) -> str:
    """Strip the ~tildes~ wrapping a text field."""
    if len(value) < 2 or value[0] != "~" or value[-1] != "~":
        raise CatalogFormatError(
            f"Expected tildes around text field: {value!r}",
            path=str(path),
            line_number=line_number,
        )
    return value[1:-1]


def _int_field(value: str, path: Path, line_number: int) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise CatalogFormatError(
            f"Expected an integer, got {value!r}", path=str(path), line_number=line_number
        ) from e


def _float_field(value: str, path: Path, line_number: int) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise CatalogFormatError(
            f"Expected a number, got {value!r}", path=str(path), line_number=line_number
        ) from e


def parse_nutrient_definitions(path: Path) -> tuple[dict[int, Nutrient], dict[str, int]]:
    """Parse NUTR_DEF.txt into nutrients and a description -> id index."""
    nutrients: dict[int, Nutrient] = {}
    name_to_id: dict[str, int] = {}

    for line_number, fields in _read_records(path, min_fields=4):
        nutrient_id = _int_field(_text_field(fields[0], path, line_number), path, line_number)
        units = _text_field(fields[1], path, line_number)
        description = _text_field(fields[3], path, line_number)

        if not is_kept_nutrient(description):
            continue

        description = ENERGY_DESCRIPTIONS.get(nutrient_id, description)

        if nutrient_id in nutrients:
            raise CatalogFormatError(
                f"Duplicate nutrient id {nutrient_id}", path=str(path), line_number=line_number
            )

        nutrients[nutrient_id] = Nutrient(id=nutrient_id, units=units, description=description)
        name_to_id[description] = nutrient_id

    return nutrients, name_to_id


def parse_food_descriptions(path: Path) -> dict[int, FoodItem]:
    """Parse FOOD_DES.txt, skipping excluded foods."""
    foods: dict[int, FoodItem] = {}
    skipped = 0

    for line_number, fields in _read_records(path, min_fields=6):
        food_id = _int_field(_text_field(fields[0], path, line_number), path, line_number)
        food_group = _text_field(fields[1], path, line_number)
        description = _text_field(fields[2], path, line_number)
        manufacturer = fields[5].strip("~")

        if is_excluded_food(food_group, description, manufacturer):
            skipped += 1
            continue

        if food_id in foods:
            raise CatalogFormatError(
                f"Duplicate food id {food_id}", path=str(path), line_number=line_number
            )

        foods[food_id] = FoodItem(
            id=food_id,
            food_group=food_group,
            description=description,
            manufacturer=manufacturer,
        )

    logger.debug(f"Skipped {skipped} excluded foods in {path.name}")
    return foods


def parse_nutrient_data(
    path: Path,
    nutrients: dict[int, Nutrient],
    foods: dict[int, FoodItem],
) -> dict[int, list[NutrientAmount]]:
    """
    Parse NUT_DATA.txt into per-food nutrient contributions.

    Amounts are given per 100 g and converted to per gram. Values backed by
    zero data points were calculated or imputed and are taken as 0. Rows for
    nutrients or foods that were filtered out are ignored.
    """
    contributions: dict[int, list[NutrientAmount]] = {}

    for line_number, fields in _read_records(path, min_fields=4):
        food_id = _int_field(_text_field(fields[0], path, line_number), path, line_number)
        nutrient_id = _int_field(_text_field(fields[1], path, line_number), path, line_number)
        amount = _float_field(fields[2], path, line_number)
        data_points = _int_field(fields[3], path, line_number)

        if nutrient_id not in nutrients or food_id not in foods:
            continue

        if data_points == 0:
            amount = 0.0

        contributions.setdefault(food_id, []).append(
            NutrientAmount(nutrient_id=nutrient_id, amount_per_gram=amount / 100)
        )

    return contributions


def load_sr26_catalog(data_dir: str | Path) -> Catalog:
    """
    Load a Catalog from an extracted SR26 directory.

    Args:
        data_dir: Directory containing NUTR_DEF.txt, FOOD_DES.txt and NUT_DATA.txt.

    Returns:
        Catalog with filtered foods and nutrients.

    Raises:
        CatalogError: If a file is missing.
        CatalogFormatError: If a record is malformed or duplicated.
    """
    base = Path(data_dir)
    logger.info(f"Loading SR26 catalog from {base}")

    nutrients, name_to_id = parse_nutrient_definitions(base / NUTRIENT_DEFINITIONS_FILE)
    foods = parse_food_descriptions(base / FOOD_DESCRIPTIONS_FILE)
    contributions = parse_nutrient_data(base / NUTRIENT_DATA_FILE, nutrients, foods)

    foods = {
        food_id: replace(food, nutrients=tuple(contributions.get(food_id, ())))
        for food_id, food in foods.items()
    }

    logger.info(f"Loaded {len(nutrients)} nutrients and {len(foods)} foods")
    return Catalog(nutrients=nutrients, foods=foods, name_to_id=name_to_id)
