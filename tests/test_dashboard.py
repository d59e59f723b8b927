import io
from datetime import datetime, timedelta
from decimal import Decimal

from openpyxl import load_workbook

from mlhub.models.saas_models import MLItem, MLOrder, MLQuestion
from tests.conftest import create_account, create_organization


def add_order(db, account, ml_order_id, total, days_ago=0, status="paid", buyer="COMPRADOR"):
    order = MLOrder(
        organization_id=account.organization_id,
        ml_account_id=account.id,
        ml_order_id=ml_order_id,
        status=status,
        date_created=datetime.utcnow() - timedelta(days=days_ago),
        total_amount=Decimal(str(total)),
        paid_amount=Decimal(str(total)),
        currency_id="BRL",
        buyer_nickname=buyer,
        order_items=[{"item_id": "MLB1", "title": "Camiseta", "quantity": 1, "unit_price": total}],
    )
    db.add(order)
    db.commit()
    return order


def add_item(db, account, ml_item_id, price=10.0, sold=0, status="active"):
    item = MLItem(
        organization_id=account.organization_id,
        ml_account_id=account.id,
        ml_item_id=ml_item_id,
        title=f"Anúncio {ml_item_id}",
        price=Decimal(str(price)),
        currency_id="BRL",
        available_quantity=5,
        sold_quantity=sold,
        status=status,
    )
    db.add(item)
    db.commit()
    return item


def test_stats(client, headers, db, organization):
    account = create_account(db, organization)
    account.reputation_level = "5_green"
    db.commit()
    add_order(db, account, 1, 100, days_ago=5)
    add_order(db, account, 2, 50, days_ago=1)
    add_order(db, account, 3, 999, days_ago=2, status="cancelled")
    add_order(db, account, 4, 75, days_ago=40)
    add_item(db, account, "MLB1")
    add_item(db, account, "MLB2")
    add_item(db, account, "MLB3", status="paused")
    db.add(MLQuestion(organization_id=organization.id, ml_account_id=account.id, ml_question_id=1,
                      text="Tem azul?", status="UNANSWERED"))
    db.commit()

    stats = client.get("/api/v1/dashboard/stats", headers=headers).json()

    assert stats["total_sales"] == 150.0
    assert stats["total_orders"] == 2
    assert stats["average_ticket"] == 75.0
    assert stats["sales_growth"] == 100.0
    assert stats["orders_growth"] == 100.0
    assert stats["active_listings"] == 2
    assert stats["pending_questions"] == 1
    assert stats["active_accounts"] == 1
    assert stats["reputation"] == "5_green"


def test_stats_without_previous_period(client, headers, db, organization):
    account = create_account(db, organization)
    add_order(db, account, 1, 80, days_ago=3)

    stats = client.get("/api/v1/dashboard/stats", headers=headers).json()

    assert stats["sales_growth"] == 0.0
    assert stats["orders_growth"] == 0.0


def test_stats_empty_organization(client, headers):
    stats = client.get("/api/v1/dashboard/stats", headers=headers).json()

    assert stats["total_sales"] == 0.0
    assert stats["average_ticket"] == 0.0
    assert stats["reputation"] is None


def test_stats_ignore_other_organizations(client, headers, db, organization):
    other_account = create_account(db, create_organization(db, name="Concorrente"))
    add_order(db, other_account, 1, 500, days_ago=1)

    assert client.get("/api/v1/dashboard/stats", headers=headers).json()["total_orders"] == 0


def test_sales_chart_fills_empty_days(client, headers, db, organization):
    account = create_account(db, organization)
    add_order(db, account, 1, 100, days_ago=0)
    add_order(db, account, 2, 50, days_ago=2)
    add_order(db, account, 3, 30, days_ago=2)
    add_order(db, account, 4, 999, days_ago=1, status="cancelled")

    chart = client.get("/api/v1/dashboard/sales-chart?days=7", headers=headers).json()

    assert len(chart) == 7
    assert chart[-1]["date"] == datetime.utcnow().date().isoformat()
    assert chart[-1] == {"date": chart[-1]["date"], "total": 100.0, "orders": 1}
    assert chart[-2]["orders"] == 0
    assert chart[-3]["total"] == 80.0
    assert chart[-3]["orders"] == 2
    assert [entry["date"] for entry in chart] == sorted(entry["date"] for entry in chart)


def test_recent_orders(client, headers, db, organization):
    account = create_account(db, organization, nickname="LOJA")
    add_order(db, account, 1, 10, days_ago=3)
    add_order(db, account, 2, 20, days_ago=1, status="cancelled")
    add_order(db, account, 3, 30, days_ago=2)

    orders = client.get("/api/v1/dashboard/recent-orders?limit=2", headers=headers).json()

    assert [order["ml_order_id"] for order in orders] == [2, 3]
    assert orders[0]["account"]["nickname"] == "LOJA"


def test_top_products(client, headers, db, organization):
    account = create_account(db, organization)
    add_item(db, account, "MLB1", price=100, sold=3)
    add_item(db, account, "MLB2", price=20, sold=10)
    add_item(db, account, "MLB3", price=5, sold=0)

    products = client.get("/api/v1/dashboard/top-products?limit=2", headers=headers).json()

    assert [product["ml_item_id"] for product in products] == ["MLB2", "MLB1"]
    assert products[0]["revenue"] == 200.0
    assert products[1]["revenue"] == 300.0


def test_export_orders_xlsx(client, headers, db, organization):
    account = create_account(db, organization, nickname="LOJA")
    add_order(db, account, 1234, 99.9, days_ago=1, buyer="ANA")
    add_order(db, account, 5678, 10, days_ago=60)

    response = client.get("/api/v1/dashboard/orders/export?days=30", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    today = datetime.utcnow().strftime("%Y%m%d")
    assert f'filename="pedidos_{today}.xlsx"' in response.headers["content-disposition"]

    sheet = load_workbook(io.BytesIO(response.content)).active
    rows = list(sheet.iter_rows(values_only=True))
    assert sheet.title == "Pedidos"
    assert rows[0][:3] == ("Pedido", "Data", "Status")
    assert len(rows) == 2
    assert rows[1][0] == "1234"
    assert rows[1][3:7] == ("LOJA", "ANA", "1x Camiseta", 99.9)
    assert sheet.column_dimensions["A"].width == 16
    assert sheet.column_dimensions["F"].width == 50


def test_synced_listings_are_paginated(client, headers, db, organization):
    account = create_account(db, organization)
    for index in range(3):
        add_order(db, account, index + 1, 10, days_ago=index)
    add_order(db, account, 9, 10, status="cancelled")
    add_item(db, account, "MLB2", status="paused")
    add_item(db, account, "MLB1")

    orders = client.get("/api/v1/mercadolivre/synced/orders?status=paid&page=2&limit=2", headers=headers).json()
    assert orders["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}
    assert [order["ml_order_id"] for order in orders["results"]] == [3]

    items = client.get("/api/v1/mercadolivre/synced/items", headers=headers).json()
    assert [item["ml_item_id"] for item in items["results"]] == ["MLB1", "MLB2"]


def test_dashboard_requires_authentication(client):
    assert client.get("/api/v1/dashboard/stats").status_code == 401
