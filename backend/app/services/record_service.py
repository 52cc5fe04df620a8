"""
Floreria Backend — Record Service (shared CRUD)
=================================================

What:  Typed CRUD over one table: list, get, create, partial update, delete.
How:   Subclasses bind a model, its input schemas and its field rules;
       RamoService adds the image lifecycle on top.
Who:   Built per request by the dependencies in app/routes/dependencies.py.

Statement shapes (all values are bound parameters, never interpolated):
    list    SELECT ... ORDER BY id DESC
    get     SELECT ... WHERE id = :id
    create  INSERT (only schema-declared columns)
    update  UPDATE ... SET <present columns> WHERE id = :id
    delete  DELETE ... WHERE id = :id

Update and delete are a single statement each; a zero affected-row count is
the NotFound signal, so a row deleted by a concurrent request between two
statements cannot be "updated" into existence.
"""

import logging
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.validation import (
    BLANK_FIELDS_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    NO_FIELDS_MESSAGE,
    is_blank,
    join_fields,
    missing_fields,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Ids are BIGINT-compatible; anything larger cannot exist in the table
MAX_RECORD_ID = 2**63 - 1


def schema_error_message(error: SchemaValidationError) -> str:
    """First readable message out of a pydantic ValidationError."""
    for detail in error.errors():
        ctx_error = (detail.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
        field = ".".join(str(part) for part in detail.get("loc", ()))
        return f"Campo inválido: {field}" if field else "Datos inválidos"
    return "Datos inválidos"


class RecordService(Generic[ModelT]):
    """
    CRUD for one entity.

    Class attributes a subclass must set:
        model:            SQLAlchemy model
        resource:         display name used in messages ("Ramo")
        create_schema:    pydantic schema whose fields are the insertable columns
        update_schema:    same fields, all optional
        required_fields:  required on create, in message order
        non_empty_fields: may be omitted on update but not blanked
    """

    model: ClassVar[Type[Base]]
    resource: ClassVar[str]
    create_schema: ClassVar[Type[BaseModel]]
    update_schema: ClassVar[Type[BaseModel]]
    required_fields: ClassVar[Sequence[str]] = ()
    non_empty_fields: ClassVar[Sequence[str]] = ()

    def __init__(self, db: AsyncSession):
        self.db = db

    # ── Messages ──────────────────────────────────────────────────────────

    @property
    def _noun(self) -> str:
        return self.resource.lower()

    def message(self, action: str) -> str:
        """'creado' → 'Ramo creado exitosamente'."""
        return f"{self.resource} {action} exitosamente"

    # ── Input ─────────────────────────────────────────────────────────────

    def parse_create(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate a POST body and return the column values to insert.

        Raises:
            ValidationError: required fields missing or a value rejected
        """
        missing = missing_fields(payload, self.required_fields)
        if missing:
            raise ValidationError(MISSING_FIELDS_MESSAGE + join_fields(missing), fields=missing)

        # Blank optional fields fall back to their defaults
        present = {k: v for k, v in payload.items() if not is_blank(v)}
        try:
            parsed = self.create_schema.model_validate(present)
        except SchemaValidationError as e:
            raise ValidationError(schema_error_message(e))
        return parsed.model_dump()

    def parse_update(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate a PUT body and return only the columns it sets.

        null means "not sent"; keys outside the schema are ignored.
        """
        present = {k: v for k, v in payload.items() if v is not None}
        blank = [f for f in self.non_empty_fields if f in present and is_blank(present[f])]
        if blank:
            raise ValidationError(BLANK_FIELDS_MESSAGE + join_fields(blank), fields=blank)
        try:
            parsed = self.update_schema.model_validate(present)
        except SchemaValidationError as e:
            raise ValidationError(schema_error_message(e))
        return parsed.model_dump(exclude_none=True)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list(self) -> List[ModelT]:
        """All rows, newest id first."""
        try:
            result = await self.db.execute(select(self.model).order_by(self.model.id.desc()))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._database_error("listar", e, plural=True)

    async def get(self, record_id: int) -> ModelT:
        """
        Fetch one row.

        Raises:
            NotFoundError: no row with this id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        if not 0 < record_id <= MAX_RECORD_ID:
            raise NotFoundError(resource=self.resource, resource_id=record_id)
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == record_id))
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("obtener", e, record_id)
        if row is None:
            raise NotFoundError(resource=self.resource, resource_id=record_id)
        return row

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, values: Dict[str, Any]) -> int:
        """INSERT one row and commit; returns the new id."""
        row = self.model(**values)
        try:
            self.db.add(row)
            await self.db.flush()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._database_error("crear", e)
        logger.info("%s created: id=%s", self.resource, row.id)
        return row.id

    async def apply_update(self, record_id: int, values: Dict[str, Any]) -> None:
        """
        UPDATE only the given columns of one row and commit.

        Raises:
            ValidationError: `values` is empty (nothing to update, → 400)
            NotFoundError: no row matched the id
        """
        if not 0 < record_id <= MAX_RECORD_ID:
            raise NotFoundError(resource=self.resource, resource_id=record_id)
        if not values:
            # An empty body on an unknown id is still a 404
            await self.get(record_id)
            raise ValidationError(NO_FIELDS_MESSAGE)

        statement = (
            update(self.model)
            .where(self.model.id == record_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(statement)
            if result.rowcount == 0:
                await self.db.rollback()
                raise NotFoundError(resource=self.resource, resource_id=record_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._database_error("actualizar", e, record_id)
        logger.info("%s %s updated: %s", self.resource, record_id, sorted(values))

    async def apply_delete(self, record_id: int) -> None:
        """DELETE one row and commit; NotFoundError when nothing matched."""
        if not 0 < record_id <= MAX_RECORD_ID:
            raise NotFoundError(resource=self.resource, resource_id=record_id)
        statement = (
            delete(self.model)
            .where(self.model.id == record_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(statement)
            if result.rowcount == 0:
                await self.db.rollback()
                raise NotFoundError(resource=self.resource, resource_id=record_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._database_error("eliminar", e, record_id)
        logger.info("%s %s deleted", self.resource, record_id)

    # ── Operations used by the routes ─────────────────────────────────────

    async def create(self, payload: Mapping[str, Any]) -> int:
        return await self.insert(self.parse_create(payload))

    async def update(self, record_id: int, payload: Mapping[str, Any]) -> None:
        await self.apply_update(record_id, self.parse_update(payload))

    async def delete(self, record_id: int) -> None:
        await self.apply_delete(record_id)

    # ── Errors ────────────────────────────────────────────────────────────

    def _database_error(
        self,
        action: str,
        error: SQLAlchemyError,
        record_id: Any = None,
        plural: bool = False,
    ) -> DatabaseError:
        noun = f"{self._noun}s" if plural else self._noun
        logger.error("Database error (%s %s, id=%s): %s", action, noun, record_id, str(error))
        return DatabaseError(
            message=f"Error al {action} {noun}",
            context={"error_type": type(error).__name__, "record_id": record_id},
        )
