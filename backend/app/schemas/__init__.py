"""
Floreria Backend — Pydantic Schemas
=====================================

What:  API contracts: the {ok, data, error} envelope, per-entity input
       schemas (the writable-field allow lists) and output rows.
"""
