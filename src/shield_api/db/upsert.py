"""按方言构造的原子 upsert 语句。"""

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import CompileError
from sqlalchemy.orm import Session

from shield_api.models.base import Base


def upsert(
    db: Session,
    model: type[Base],
    values: Mapping[str, Any],
    *,
    conflict_columns: Iterable[str],
    update_columns: Iterable[str],
) -> None:
    """插入一行，主键冲突时就地更新指定列。

    单条语句完成，由数据库保证行级原子性；并发写入同一主键时最后一次写入生效。
    """
    dialect = db.get_bind().dialect.name
    table = model.__table__
    update_columns = list(update_columns)

    if dialect == "mysql":
        stmt = mysql.insert(table).values(**values)
        stmt = stmt.on_duplicate_key_update({col: stmt.inserted[col] for col in update_columns})
    elif dialect in {"postgresql", "sqlite"}:
        module = postgresql if dialect == "postgresql" else sqlite
        stmt = module.insert(table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_={col: stmt.excluded[col] for col in update_columns},
        )
    else:
        raise CompileError(f"upsert not supported for dialect {dialect}")

    db.execute(stmt)
