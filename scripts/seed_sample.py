"""
Sample dataset seeder for the paintings EDA toolkit.

Creates the fixture schema (`db/init.sql`) and loads a small hand-made
dataset through CSV + Postgres COPY. Optionally appends exact copies of a few
rows so the duplicate pruner has something to remove.
"""

from __future__ import annotations

import csv
import sys
import tempfile
import time
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Sequence

import psycopg
import typer
from psycopg import sql
from pydantic import BaseModel

from art_eda.domain.models import (
    WEEKDAYS,
    Artist,
    CanvasSize,
    ImageLink,
    Museum,
    MuseumHours,
    Painting,
    Price,
    Subject,
)
from art_eda.infrastructure.db_factory import build_dsn

app = typer.Typer(help="Create the fixture schema and load the sample paintings dataset.")

INIT_SQL = Path(__file__).resolve().parent.parent / "db" / "init.sql"

# Load order; also the truncate order.
TABLES = (
    "artist",
    "museum",
    "museum_hours",
    "work",
    "canvas_size",
    "product_size",
    "subject",
    "image_link",
)


def _hours(museum_id: int, days: Sequence[str], open_: str, close: str) -> List[MuseumHours]:
    return [MuseumHours(museum_id=museum_id, day=day, open=open_, close=close) for day in days]


def sample_dataset() -> Dict[str, List[BaseModel]]:
    """
    The sample rows, keyed by table name, without duplicates.
    """
    museums = [
        Museum(museum_id=1, name="The Metropolitan Museum of Art", city="New York", state="NY", country="USA"),
        Museum(museum_id=2, name="Rijksmuseum", city="Amsterdam", country="Netherlands"),
        Museum(museum_id=3, name="National Gallery", city="London", country="UK"),
        Museum(museum_id=4, name="Musée du Louvre", city="Paris", country="France"),
        Museum(museum_id=5, name="Museo del Prado", city="Madrid", country="Spain"),
        Museum(museum_id=6, name="Musée d'Orsay", city="Paris", country="France"),
        Museum(museum_id=7, name="Galerie Numérique", city="75001", country="France"),
    ]
    artists = [
        Artist(artist_id=1, full_name="Claude Monet", nationality="French", style="Impressionist"),
        Artist(artist_id=2, full_name="Vincent Van Gogh", nationality="Dutch", style="Post-Impressionist"),
        Artist(artist_id=3, full_name="Peter Paul Rubens", nationality="Flemish", style="Baroque"),
        Artist(artist_id=4, full_name="Rembrandt van Rijn", nationality="Dutch", style="Baroque"),
    ]
    works = [
        Painting(work_id=101, name="Water Lilies", artist_id=1, style="Impressionism", museum_id=1),
        Painting(work_id=102, name="Haystacks", artist_id=1, style="Impressionism", museum_id=3),
        Painting(work_id=103, name="Self-Portrait", artist_id=2, style="Post-Impressionism", museum_id=2),
        Painting(work_id=104, name="Portrait of the Postman", artist_id=2, style="Post-Impressionism", museum_id=4),
        Painting(work_id=105, name="Fortuna", artist_id=3, style="Baroque", museum_id=5),
        Painting(work_id=106, name="The Night Watch", artist_id=4, style="Baroque", museum_id=2),
        Painting(work_id=107, name="Impression, Sunrise", artist_id=1, style="Impressionism", museum_id=4),
        Painting(work_id=108, name="Sketch of a Wheatfield", artist_id=2, style="Post-Impressionism"),
        Painting(work_id=109, name="Portrait of a Man", artist_id=4, style="Baroque", museum_id=2),
        Painting(work_id=110, name="Poplars", artist_id=1, style="Impressionism", museum_id=1),
    ]
    canvas_sizes = [
        CanvasSize(size_id=20, width=20, label='20" Long Edge'),
        CanvasSize(size_id=36, width=36, label='36" Long Edge'),
        CanvasSize(size_id=48, width=48, height=96, label='48" x 96"(122 cm x 244 cm)'),
    ]
    prices = [
        Price(work_id="101", size_id="20", sale_price=Decimal("85"), regular_price=Decimal("100")),
        Price(work_id="101", size_id="36", sale_price=Decimal("120"), regular_price=Decimal("140")),
        Price(work_id="102", size_id="20", sale_price=Decimal("40"), regular_price=Decimal("100")),
        Price(work_id="103", size_id="36", sale_price=Decimal("150"), regular_price=Decimal("150")),
        Price(work_id="105", size_id="48", sale_price=Decimal("1115"), regular_price=Decimal("1200")),
        Price(work_id="106", size_id="20", sale_price=Decimal("10"), regular_price=Decimal("30")),
        Price(work_id="107", size_id="36", sale_price=Decimal("10"), regular_price=Decimal("25")),
        Price(work_id="109", size_id="48", sale_price=Decimal("200"), regular_price=Decimal("220")),
    ]
    subjects = [
        Subject(work_id="101", subject="Flowers"),
        Subject(work_id="102", subject="Landscape Art"),
        Subject(work_id="103", subject="Portraits"),
        Subject(work_id="104", subject="Portraits"),
        Subject(work_id="105", subject="Portraits"),
        Subject(work_id="106", subject="Portraits"),
        Subject(work_id="107", subject="Seascapes"),
        Subject(work_id="109", subject="Portraits"),
        Subject(work_id="110", subject="Landscape Art"),
    ]
    hours = (
        _hours(1, WEEKDAYS, "10:00:AM", "05:00:PM")
        + _hours(2, WEEKDAYS, "09:00:AM", "05:00:PM")
        + _hours(3, WEEKDAYS[:5], "10:00:AM", "06:00:PM")
        + _hours(4, ("Monday", "Wednesday", "Thursday", "Saturday", "Sunday"), "09:00:AM", "06:00:PM")
        + _hours(4, ("Friday",), "09:00:AM", "09:45:PM")
        + _hours(5, ("Tuesday", "Sunday"), "10:00:AM", "07:00:PM")
    )
    images = [
        ImageLink(work_id=work.work_id, url=f"https://images.example.org/{work.work_id}.jpg")
        for work in works
    ]
    return {
        "artist": artists,
        "museum": museums,
        "museum_hours": hours,
        "work": works,
        "canvas_size": canvas_sizes,
        "product_size": prices,
        "subject": subjects,
        "image_link": images,
    }


def with_duplicates(dataset: Dict[str, List[BaseModel]]) -> Dict[str, List[BaseModel]]:
    """
    Append one exact copy of a row to each table the pruner targets.
    """
    duplicated = {table: list(rows) for table, rows in dataset.items()}
    duplicated["work"].append(duplicated["work"][2])
    duplicated["product_size"].append(duplicated["product_size"][0])
    duplicated["image_link"].append(duplicated["image_link"][4])
    duplicated["museum_hours"].append(
        next(h for h in duplicated["museum_hours"] if h.museum_id == 3 and h.day == "Monday")
    )
    return duplicated


def _write_csv(csv_path: Path, rows: Sequence[BaseModel]) -> List[str]:
    """Write model rows as CSV with a header; None becomes an unquoted empty field (NULL)."""
    columns = list(type(rows[0]).model_fields) if rows else []
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for row in rows:
            values = row.model_dump()
            writer.writerow(["" if values[c] is None else values[c] for c in columns])
    return columns


def _create_schema(conn: psycopg.Connection) -> None:
    with conn.cursor() as cur:
        cur.execute(INIT_SQL.read_text(encoding="utf-8"))


def _truncate(conn: psycopg.Connection) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("TRUNCATE TABLE {}").format(
                sql.SQL(", ").join(sql.Identifier("public", table) for table in TABLES)
            )
        )


def _copy_table(conn: psycopg.Connection, table: str, columns: List[str], csv_path: Path) -> None:
    statement = sql.SQL("COPY {} ({}) FROM STDIN WITH (FORMAT csv, HEADER TRUE)").format(
        sql.Identifier("public", table),
        sql.SQL(", ").join(sql.Identifier(c) for c in columns),
    )
    with conn.cursor() as cur:
        with cur.copy(statement) as copy:
            with csv_path.open("r", encoding="utf-8") as f:
                for line in f:
                    copy.write(line)


def seed(dsn: str, duplicates: bool = True, workdir: Path | None = None) -> Dict[str, int]:
    """
    Create the schema if needed, empty the tables and load the sample rows.

    Returns the number of rows loaded per table.
    """
    dataset = sample_dataset()
    if duplicates:
        dataset = with_duplicates(dataset)

    loaded: Dict[str, int] = {}
    with tempfile.TemporaryDirectory(prefix="paintings_csv_", dir=workdir) as tmpdir:
        with psycopg.connect(dsn) as conn:
            _create_schema(conn)
            _truncate(conn)
            for table in TABLES:
                rows = dataset[table]
                csv_path = Path(tmpdir) / f"{table}.csv"
                columns = _write_csv(csv_path, rows)
                _copy_table(conn, table, columns, csv_path)
                loaded[table] = len(rows)
            conn.commit()
    return loaded


@app.command()
def main(
    duplicates: bool = typer.Option(
        True,
        "--duplicates/--no-duplicates",
        help="Append exact copies of a few rows so pruning has work to do.",
    ),
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
) -> None:
    """
    Load the sample dataset into Postgres using COPY.
    """
    start = time.perf_counter()
    conn_dsn = dsn or build_dsn()
    typer.echo("Loading sample dataset via COPY...")
    loaded = seed(conn_dsn, duplicates=duplicates)
    for table, count in loaded.items():
        typer.echo(f"  {table}: {count} rows")
    typer.echo(f"Done in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
