"""Pytest fixtures for Pointsman tests."""

from datetime import date

import pytest

from pointsman.models import Customer, Prize, Store, StoreCustomerBalance


@pytest.fixture
def store(db):
    """Create a test store."""
    return Store.objects.create(
        name="Tech Corner",
        email="tech@example.com",
        sector="tech",
        phone="600000001",
    )


@pytest.fixture
def store_b(db):
    """Create a second store."""
    return Store.objects.create(
        name="Green Grocer",
        email="grocer@example.com",
        sector="food",
    )


@pytest.fixture
def customer(db):
    """Create a test customer."""
    return Customer.objects.create(
        first_name="Ana",
        last_name="Lopez",
        email="ana@example.com",
        birthdate=date(1990, 6, 15),
        postcode="28001",
    )


@pytest.fixture
def customer_b(db):
    return Customer.objects.create(
        first_name="Luis",
        last_name="Perez",
        email="luis@example.com",
    )


@pytest.fixture
def balance(store, customer):
    """Customer holds 200 points at the store."""
    return StoreCustomerBalance.objects.create(store=store, customer=customer, points=200)


@pytest.fixture
def prize(store):
    """Prize costing exactly the fixture balance."""
    return Prize.objects.create(store=store, name="Headphones", category="audio", points=200)


@pytest.fixture
def prize_expensive(store):
    """Prize one point above the fixture balance."""
    return Prize.objects.create(store=store, name="Speaker", category="audio", points=201)
