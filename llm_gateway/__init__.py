from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import HttpClient, HttpResponse, chat, parse_json_object

__all__ = ["HttpClient", "HttpResponse", "chat", "parse_json_object"]
