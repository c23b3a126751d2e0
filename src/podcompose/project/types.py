"""Project domain types."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Image(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str  # Image reference, e.g. docker.io/library/nginx:latest


class Pod(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    share: str = ""  # Shared namespaces, e.g. "net" or "net,ipc"


class Service(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class Container(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    service: Service | None = None  # Not owned; the registry holds the Service
