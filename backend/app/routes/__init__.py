# Routes package init
"""
Floreria Backend — API Routes Package
=======================================

Route Inventory (paths after the /api prefix is stripped):
    - health.py:   ANY  /, /health           (liveness probe)
    - ramos.py:    GET/POST /ramos, GET/PUT/DELETE /ramos/{id}
    - pedidos.py:  GET/POST /pedidos, GET/PUT/DELETE /pedidos/{id}
    - uploads.py:  GET  /uploads/{filename}  (stored ramo images)

Routes stay thin: read the body, call a service, wrap the result in an
Envelope. Errors are raised and turned into envelopes by main.py.
"""
