"""
Interface web REST (FastAPI).

L'application est construite par create_app() ; src.web.app:app est
l'instance servie par uvicorn.
"""
