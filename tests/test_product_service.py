"""Tests for ProductService stock handling."""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from billing.database import Base
from billing.models.product import Product
from billing.schemas.product import ProductCreate
from billing.services.product_service import (
    ProductService,
    ProductExistsError,
    ProductNotFoundError,
    InsufficientQuantityError
)


@pytest.fixture
def service(db_session):
    service = ProductService(db_session)
    service.create(ProductCreate(product_id="P-001", name="Rice", price=12.5, quantity=10))
    return service


@pytest.fixture
def file_sessionmaker(tmp_path):
    """Session factory on a file-backed database so each thread gets its own connection."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'stock.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

    engine.dispose()


def test_reduce_quantity(service):
    product = service.reduce_quantity("P-001", 4)

    assert product.quantity == 6


def test_reduce_quantity_insufficient_leaves_stock(service, db_session):
    with pytest.raises(InsufficientQuantityError):
        service.reduce_quantity("P-001", 11)

    product = db_session.query(Product).filter(Product.product_id == "P-001").first()
    assert product.quantity == 10


def test_reduce_quantity_not_found(service):
    with pytest.raises(ProductNotFoundError):
        service.reduce_quantity("NOPE", 1)


def test_concurrent_reductions_never_oversell(file_sessionmaker):
    """Test simultaneous reductions asking for more than the stock only take what exists."""
    SessionLocal = file_sessionmaker
    with SessionLocal() as session:
        ProductService(session).create(
            ProductCreate(product_id="P-001", name="Rice", price=12.5, quantity=10)
        )

    workers = 8
    barrier = threading.Barrier(workers)

    def reduce_by_three(_):
        session = SessionLocal()
        try:
            service = ProductService(session)
            barrier.wait()
            service.reduce_quantity("P-001", 3)
            return True
        except InsufficientQuantityError:
            return False
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(reduce_by_three, range(workers)))

    # 10 // 3 reductions fit in stock
    assert results.count(True) == 3
    assert results.count(False) == workers - 3

    with SessionLocal() as session:
        product = ProductService(session).get_by_product_id("P-001")
        assert product.quantity == 1


def test_reduce_quantity_survives_delete_after_commit(service, db_session, monkeypatch, caplog):
    """Test a delete landing right after the reduction commits does not break the reduce."""
    real_commit = db_session.commit

    def commit_then_delete():
        real_commit()
        db_session.query(Product).filter(Product.product_id == "P-001").delete()
        real_commit()

    monkeypatch.setattr(db_session, "commit", commit_then_delete)

    with caplog.at_level(logging.INFO):
        service.reduce_quantity("P-001", 4)

    assert any("6.0 left" in r.getMessage() for r in caplog.records)


def test_create_duplicate_product_id(service):
    with pytest.raises(ProductExistsError) as exc_info:
        service.create(ProductCreate(product_id="P-001", name="Other", price=1, quantity=1))

    assert str(exc_info.value) == "Product already exists"
    assert len(service.get_all()) == 1
