# Services package init
"""
Floreria Backend — Services Layer
===================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services take validated-or-raw request data, apply the entity rules,
       and raise app.exceptions errors; routes only wrap results in envelopes.

Service Inventory:
    - RecordService: shared list/get/create/update/delete over one table
    - RamoService:   catalogo_ramos CRUD + image lifecycle
    - PedidoService: pedido CRUD
    - ImageService:  data-URI decoding, image files, public URLs
"""
