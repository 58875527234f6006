# This file marks the API package: FastAPI app, routers, schemas, and storage wiring.
