# ============================================================================
# ConvertKit - Test Configuration and Fixtures
#
# Purpose: Shared pytest fixtures and sample structures for serialization tests
# Inputs: None
# Outputs: Fixtures for use in tests
# Dependencies: pytest, pydantic, dataclasses
# Usage: pytest tests/ (fixtures are automatically available)
#
# Changelog:
#   2026-03-03: Initial sample models for JSON tests
#   2026-03-05: Added tagged/aliased models for XML tests
#   2026-03-16: Bytes-carrying structures; root logger restore fixture
# ============================================================================

import logging
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

import pytest
from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """Plain model; XML root element defaults to the class name."""

    id: int
    name: str


class TaggedItem(BaseModel):
    """Model with an explicit XML root element name."""

    xml_tag: ClassVar[str] = "item"

    id: int
    name: str


class LineItem(BaseModel):
    sku: str
    quantity: int = 1
    price: float = 0.0


class Order(BaseModel):
    xml_tag: ClassVar[str] = "order"

    order_id: int = Field(alias="orderId")
    customer: Optional[str] = None
    paid: bool = False
    lines: List[LineItem] = Field(default_factory=list, alias="line")
    tags: List[str] = Field(default_factory=list, alias="tag")


class FrozenPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int


@dataclass
class Record:
    key: str
    count: int = 0
    labels: List[str] = field(default_factory=list)


@dataclass
class Blob:
    data: bytes


class Attachment(BaseModel):
    name: str
    checksum: Optional[bytes] = None
    chunks: List[bytes] = Field(default_factory=list)


@pytest.fixture
def order() -> Order:
    return Order(
        orderId=7,
        customer="ACME",
        paid=True,
        line=[LineItem(sku="A-1", quantity=2, price=9.5), LineItem(sku="B-2")],
        tag=["rush", "gift"],
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CONVERTKIT_* overrides inherited from the calling shell."""
    import os

    for key in list(os.environ):
        if key.startswith("CONVERTKIT_"):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    """Drop handlers a test installs on the root logger and put its level back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
