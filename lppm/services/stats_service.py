"""
Dashboard aggregates: record counts per category and per study program.
"""
from typing import Any, Dict, Optional

from sqlalchemy import Table, and_, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.author import Author, StudyProgram
from ..utils.helpers import format_currency, generate_colors, percentage


async def grouped_counts(
    session: AsyncSession,
    model,
    group_column,
    study_program_id: Optional[int] = None,
    funds_column=None,
    skip_empty: bool = False,
) -> Dict[str, Dict[str, Any]]:
    """``{group: {"count": n}}`` over ``model`` grouped by ``group_column``.

    With ``study_program_id`` only records having an author in that program
    are counted. ``funds_column`` adds a ``total_funds`` currency total.
    """
    columns = [group_column.label("group_key"), func.count(model.id).label("total")]
    if funds_column is not None:
        columns.append(func.coalesce(func.sum(funds_column), 0).label("funds"))

    query = select(*columns).group_by(group_column).order_by(group_column)
    if study_program_id is not None:
        query = query.where(model.authors.any(Author.study_program_id == study_program_id))
    if skip_empty:
        query = query.where(group_column.is_not(None))

    grouped: Dict[str, Dict[str, Any]] = {}
    for row in (await session.execute(query)).all():
        entry: Dict[str, Any] = {"count": row.total}
        if funds_column is not None:
            entry["total_funds"] = format_currency(row.funds)
        grouped[row.group_key if row.group_key is not None else ""] = entry
    return grouped


async def chart_data(
    session: AsyncSession,
    model,
    link_table: Table,
    link_column: str,
    year_column,
    year: Optional[str] = None,
    condition=None,
) -> Dict[str, Any]:
    """Distinct record counts per study program, every program included.

    ``year`` and ``condition`` restrict which records are joined, so programs
    without matching records still appear with a count of 0.
    """
    record_join = link_table.c[link_column] == model.id
    if year:
        record_join = and_(record_join, year_column == str(year))
    if condition is not None:
        record_join = and_(record_join, condition)

    query = (
        select(
            StudyProgram.name.label("name"),
            func.count(distinct(model.id)).label("total"),
        )
        .select_from(StudyProgram)
        .outerjoin(Author, Author.study_program_id == StudyProgram.id)
        .outerjoin(link_table, link_table.c.author_id == Author.id)
        .outerjoin(model, record_join)
        .group_by(StudyProgram.id, StudyProgram.name)
        .order_by(StudyProgram.name)
    )
    rows = (await session.execute(query)).all()
    total = sum(row.total for row in rows)

    return {
        "labels": [row.name for row in rows],
        "datasets": {
            "data": [row.total for row in rows],
            "background_color": generate_colors(len(rows)),
        },
        "study_programs": [
            {"name": row.name, "total": row.total, "percentage": percentage(row.total, total)}
            for row in rows
        ],
        "total": total,
    }
