"""Codes de statut HTTP utilisés par l'API et ses tests (évite les valeurs magiques)."""

HTTP_OK = 200
HTTP_NOT_FOUND = 404
HTTP_UNPROCESSABLE_ENTITY = 422
