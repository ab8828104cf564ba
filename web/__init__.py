"""
Web application package for the Tic-Tac-Toe engine.

Provides a FastAPI-based REST API and a plain HTML/JS frontend for two
players sharing one browser. Deployable anywhere uvicorn runs via Procfile.
"""
