"""
Floreria Backend — Validation & Configuration Unit Tests
==========================================================

What:  Tests for the input helpers, the request schemas, the path prefix
       rule and the settings validators.
How:   Pure functions and pydantic models; no database, no HTTP.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings
from app.middleware.api_prefix import strip_prefix
from app.schemas.envelope import Envelope
from app.schemas.pedido import PedidoCreate, PedidoUpdate
from app.schemas.ramo import RAMO_REQUIRED_FIELDS, RamoCreate
from app.validation import clean_text, coerce_number, is_blank, join_fields, missing_fields


class TestMissingFields:

    def test_reports_fields_in_declared_order(self):
        assert missing_fields({"valor": 10}, RAMO_REQUIRED_FIELDS) == ["titulo", "categoria"]

    def test_null_and_blank_count_as_missing(self):
        payload = {"titulo": "   ", "valor": None, "categoria": "Amor"}
        assert missing_fields(payload, RAMO_REQUIRED_FIELDS) == ["titulo", "valor"]

    def test_zero_is_a_value(self):
        payload = {"titulo": "Rosas", "valor": 0, "categoria": "Amor"}
        assert missing_fields(payload, RAMO_REQUIRED_FIELDS) == []

    def test_join_fields(self):
        assert join_fields(["titulo", "categoria"]) == "titulo, categoria"

    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("")
        assert is_blank(" \t")
        assert not is_blank(0)
        assert not is_blank("x")


class TestCoercion:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("19.99", 19.99),
            (19.99, 19.99),
            (" 25 ", 25.0),
            (7, 7.0),
            ("abc", 0.0),
            ("", 0.0),
            ("nan", 0.0),
            ("inf", 0.0),
            (True, 0.0),
            ([1, 2], 0.0),
        ],
    )
    def test_coerce_number(self, raw, expected):
        assert coerce_number(raw) == expected

    def test_coerce_number_keeps_none(self):
        assert coerce_number(None) is None

    def test_clean_text(self):
        assert clean_text("  Rosas rojas ") == "Rosas rojas"
        assert clean_text(3001234567) == "3001234567"
        assert clean_text(None) is None


class TestSchemas:

    def test_ramo_create_trims_and_coerces(self):
        ramo = RamoCreate.model_validate({"titulo": " Rosas ", "valor": "19.99", "categoria": "Amor"})
        assert ramo.titulo == "Rosas"
        assert ramo.valor == 19.99
        assert ramo.description == ""
        assert ramo.imagen is None

    def test_ramo_create_rejects_negative_valor(self):
        with pytest.raises(PydanticValidationError, match="El campo valor no puede ser negativo"):
            RamoCreate.model_validate({"titulo": "Rosas", "valor": -1, "categoria": "Amor"})

    def test_ramo_create_ignores_unknown_keys(self):
        ramo = RamoCreate.model_validate(
            {"titulo": "Rosas", "valor": 1, "categoria": "Amor", "id": 99, "drop": "table"}
        )
        assert "id" not in ramo.model_dump()
        assert "drop" not in ramo.model_dump()

    def test_pedido_defaults(self):
        pedido = PedidoCreate.model_validate(
            {
                "nombre_cliente": "Ana",
                "direccion": "Calle 1",
                "fecha_entrega": "2025-02-14",
                "valor_ramo": "45000",
            }
        )
        assert pedido.estado == "En proceso"
        assert pedido.cantidad_pagada == 0.0
        assert pedido.valor_ramo == 45000.0

    def test_pedido_update_only_dumps_sent_fields(self):
        update = PedidoUpdate.model_validate({"estado": "Entregado"})
        assert update.model_dump(exclude_none=True) == {"estado": "Entregado"}

    def test_pedido_rejects_negative_payment(self):
        with pytest.raises(PydanticValidationError, match="cantidad_pagada no puede ser negativo"):
            PedidoUpdate.model_validate({"cantidad_pagada": "-5"})


class TestEnvelope:

    def test_success(self):
        assert Envelope.success({"id": 1}).model_dump() == {"ok": True, "data": {"id": 1}, "error": None}

    def test_failure(self):
        assert Envelope.failure("Ramo no encontrado").model_dump() == {
            "ok": False,
            "data": None,
            "error": "Ramo no encontrado",
        }


class TestApiPrefix:

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/api/ramos", "/ramos"),
            ("/api/pedidos/3", "/pedidos/3"),
            ("/api", "/"),
            ("/ramos", "/ramos"),
            ("/apiary", "/apiary"),
        ],
    )
    def test_strip_prefix(self, path, expected):
        assert strip_prefix(path, "/api") == expected

    def test_empty_prefix_is_noop(self):
        assert strip_prefix("/api/ramos", "") == "/api/ramos"


class TestSettings:

    def test_api_prefix_normalized(self):
        assert Settings(api_prefix="api/").api_prefix == "/api"

    def test_log_level_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_is_sqlite(self):
        assert Settings(database_url="sqlite+aiosqlite:///x.db").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://u:p@h/db").is_sqlite
