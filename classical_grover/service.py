# service.py
# Request boundary in front of the search driver: reject bad parameters
# without ever building an engine, otherwise run the search and attach a
# human-readable message.
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from classical_grover.amplitude import is_integer
from classical_grover.search import ClassicalGroverSearch, GroverResult

INVALID_MESSAGE = "Invalid input parameters."
SUCCESS_MESSAGE = "Search successful!"
FAILURE_MESSAGE = "Search failed to find the target."


@dataclass
class SearchRequest:
    search_space_size: int
    target_index: int


@dataclass
class SearchResponse:
    message: str
    result: Optional[GroverResult] = None
    status: int = 200

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "status": self.status,
            "result": self.result.to_dict() if self.result is not None else None,
        }


def is_valid_request(request: SearchRequest, max_size: int) -> bool:
    size = request.search_space_size
    target = request.target_index
    if not is_integer(size) or not is_integer(target):
        return False
    if size <= 0 or size > max_size:
        return False
    return 0 <= target < size


def handle_search_request(request: SearchRequest,
                          searcher: Optional[ClassicalGroverSearch] = None) -> SearchResponse:
    if searcher is None:
        searcher = ClassicalGroverSearch()

    if not is_valid_request(request, searcher.config.max_size):
        logging.warning(
            f"Rejected search request: size={request.search_space_size}, "
            f"target={request.target_index}")
        return reject_response()

    result = searcher.execute_search(request.search_space_size, request.target_index)
    return build_response(result)


def build_response(result: GroverResult) -> SearchResponse:
    message = SUCCESS_MESSAGE if result.success else FAILURE_MESSAGE
    return SearchResponse(message, result, status=200)


def reject_response() -> SearchResponse:
    return SearchResponse(INVALID_MESSAGE, None, status=400)
