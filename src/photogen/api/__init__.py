"""photogen - HTTP surface for the Replicate adapter.

Modules
-------
main
    FastAPI app exposing training and generation routes, plus the
    ``photogen`` console entry point.
models
    Request and response bodies used only by the HTTP layer.
"""
