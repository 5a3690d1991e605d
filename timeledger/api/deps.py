from fastapi import Request

from timeledger.storage import DataStore


def get_store(request: Request) -> DataStore:
    return request.app.state.store
