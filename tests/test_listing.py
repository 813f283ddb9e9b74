"""
List filtering and pagination tests.
"""

from clientdesk.utils.listing import client_matches, filter_items, paginate


def test_paginate_slices_pages():
    items = list(range(25))

    first = paginate(items, page=1, page_size=10)
    last = paginate(items, page=3, page_size=10)

    assert first.items == list(range(10))
    assert first.total == 25
    assert first.total_pages == 3
    assert last.items == [20, 21, 22, 23, 24]
    assert last.page == 3


def test_paginate_out_of_range_and_bad_input():
    items = list(range(5))

    assert paginate(items, page=4, page_size=5).items == []
    assert paginate(items, page=0, page_size=2).page == 1
    assert paginate(items, page=-3, page_size=2).items == [0, 1]
    assert paginate(items, page=1, page_size=0).page_size == 1


def test_paginate_empty():
    page = paginate([], page=1, page_size=10)

    assert page.items == []
    assert page.total == 0
    assert page.total_pages == 0


def test_filter_items():
    assert filter_items([1, 2, 3, 4], lambda n: n % 2 == 0) == [2, 4]
    assert filter_items((1, 2)) == [1, 2]


def test_client_matches():
    clients = [
        {"name": "Ana Lopez", "email": "ana@acme.test", "companyName": "Acme Corp", "status": "active"},
        {"name": "Ben Ng", "email": "ben@bolt.test", "companyName": "Bolt LLC", "status": "pending"},
        {"name": "Coil Inc", "email": "", "companyName": None, "status": "inactive"},
    ]

    assert filter_items(clients, client_matches()) == clients
    assert [c["name"] for c in filter_items(clients, client_matches(search="ACME"))] == ["Ana Lopez"]
    assert [c["name"] for c in filter_items(clients, client_matches(search="bolt.test"))] == ["Ben Ng"]
    assert [c["name"] for c in filter_items(clients, client_matches(status="Pending"))] == ["Ben Ng"]
    assert filter_items(clients, client_matches(search="ana", status="pending")) == []
