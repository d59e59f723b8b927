from datetime import datetime, timedelta
from decimal import Decimal

from mlhub.config.database import SessionLocal
from mlhub.models.saas_models import MLAccount, MLItem, MLOrder, MLQuestion
from mlhub.services.auto_sync_service import AutoSyncService
from mlhub.services.sync_service import SyncService, to_naive_utc
from tests.conftest import create_account, create_organization
from tests.fakes import FakeResponse


def order(order_id, total=100.0, status="paid", date_created="2025-01-10T10:00:00.000-03:00"):
    return {
        "id": order_id,
        "status": status,
        "date_created": date_created,
        "total_amount": total,
        "paid_amount": total,
        "currency_id": "BRL",
        "buyer": {"id": 77, "nickname": "COMPRADOR"},
        "shipping": {"id": 4000},
        "order_items": [{"item": {"id": "MLB1", "title": "Camiseta"}, "quantity": 2, "unit_price": total / 2}],
    }


def item(item_id, sold=0, status="active"):
    return {
        "id": item_id,
        "title": f"Anúncio {item_id}",
        "category_id": "MLB1051",
        "price": 49.9,
        "currency_id": "BRL",
        "available_quantity": 10,
        "sold_quantity": sold,
        "status": status,
        "listing_type_id": "gold_special",
        "permalink": f"https://produto.mercadolivre.com.br/{item_id}",
    }


def setup_marketplace(api, orders=None, item_ids=("MLB1",), questions=None):
    orders = orders if orders is not None else [order(1), order(2, total=50.0)]
    questions = questions if questions is not None else [{
        "id": 9,
        "item_id": "MLB1",
        "text": "Tem azul?",
        "status": "ANSWERED",
        "date_created": "2025-01-11T09:00:00.000-03:00",
        "answer": {"text": "Temos sim", "status": "ACTIVE", "date_created": "2025-01-11T10:00:00.000-03:00"},
        "from": {"id": 77},
    }]
    api.add("GET", "/users/me", {"id": 111, "nickname": "LOJA_SYNC", "seller_reputation": {"level_id": "4_light_green"}})
    api.add("GET", "/orders/search", {"results": orders, "paging": {"total": len(orders), "offset": 0, "limit": 50}})
    api.add("GET", "/users/111/items/search", {
        "results": list(item_ids),
        "paging": {"total": len(item_ids), "offset": 0, "limit": 50},
    })

    def multiget(query, kwargs):
        return FakeResponse(200, [{"code": 200, "body": item(item_id)} for item_id in query["ids"].split(",")])

    api.add_handler("GET", "/items", multiget)
    api.add("GET", "/questions/search", {"questions": questions, "total": len(questions), "limit": 50})


def test_to_naive_utc():
    aware = datetime.fromisoformat("2025-01-10T10:00:00-03:00")
    assert to_naive_utc(aware) == datetime(2025, 1, 10, 13, 0)
    assert to_naive_utc(None) is None


def test_sync_endpoint_stores_everything(client, api, headers, db, organization):
    account = create_account(db, organization)
    setup_marketplace(api)

    response = client.post("/api/v1/mercadolivre/sync", json={"days_back": 7}, headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    result = data["accounts"][0]
    assert result["orders"] == {"created": 2, "updated": 0}
    assert result["items"] == {"created": 1, "updated": 0}
    assert result["questions"] == {"created": 1, "updated": 0}
    assert result["profile"] == {"nickname": "LOJA_SYNC", "reputation_level": "4_light_green"}

    db.expire_all()
    stored = db.query(MLOrder).filter(MLOrder.ml_order_id == 1).one()
    assert stored.total_amount == Decimal("100.00")
    assert stored.buyer_nickname == "COMPRADOR"
    assert stored.shipping_id == 4000
    assert stored.date_created == datetime(2025, 1, 10, 13, 0)
    assert stored.order_items == [{"item_id": "MLB1", "title": "Camiseta", "quantity": 2, "unit_price": 50.0}]

    question = db.query(MLQuestion).one()
    assert question.answer_text == "Temos sim"
    assert question.answered_at == datetime(2025, 1, 11, 13, 0)

    assert db.query(MLItem).one().listing_type_id == "gold_special"
    assert db.get(MLAccount, account.id).last_sync_at is not None

    search = api.calls_to("/orders/search")[0]["query"]
    assert search["seller"] == "111"
    assert search["order.date_created.from"].endswith("T00:00:00.000-00:00")


def test_second_sync_updates_existing_rows(db, api, sdk_factory, organization):
    account = create_account(db, organization)
    setup_marketplace(api)
    service = SyncService(db, sdk_factory)
    service.sync_account(account)

    setup_marketplace(api, orders=[order(1, status="cancelled")])
    result = service.sync_account(account)

    assert result["orders"] == {"created": 0, "updated": 1}
    assert db.query(MLOrder).count() == 2
    assert db.query(MLOrder).filter(MLOrder.ml_order_id == 1).one().status == "cancelled"


def test_orders_follow_pagination(db, api, sdk_factory, organization):
    account = create_account(db, organization)
    api.add_sequence("GET", "/orders/search", [
        FakeResponse(200, {"results": [order(1), order(2)], "paging": {"total": 3, "offset": 0, "limit": 2}}),
        FakeResponse(200, {"results": [order(3)], "paging": {"total": 3, "offset": 2, "limit": 2}}),
    ])

    result = SyncService(db, sdk_factory).sync_account_orders(account, sdk=sdk_factory(access_token="x"))

    assert result == {"created": 3, "updated": 0}
    assert [call["query"]["offset"] for call in api.calls_to("/orders/search")] == ["0", "2"]


def test_items_are_fetched_in_chunks_of_twenty(db, api, sdk_factory, organization):
    account = create_account(db, organization)
    item_ids = [f"MLB{index}" for index in range(25)]
    setup_marketplace(api, item_ids=item_ids)

    result = SyncService(db, sdk_factory).sync_account_items(account, sdk=sdk_factory(access_token="x"))

    assert result["created"] == 25
    chunks = [call["query"]["ids"].split(",") for call in api.calls_to("/items")]
    assert [len(chunk) for chunk in chunks] == [20, 5]


def test_failed_items_in_multiget_are_skipped(db, api, sdk_factory, organization):
    account = create_account(db, organization)
    api.add("GET", "/users/111/items/search", {"results": ["MLB1", "MLB2"], "paging": {"total": 2, "offset": 0, "limit": 50}})
    api.add("GET", "/items", [{"code": 200, "body": item("MLB1")}, {"code": 404, "body": {"error": "not_found"}}])

    result = SyncService(db, sdk_factory).sync_account_items(account, sdk=sdk_factory(access_token="x"))

    assert result == {"created": 1, "updated": 0}


def test_account_failure_does_not_stop_others(db, api, sdk_factory, organization):
    healthy = create_account(db, organization, ml_user_id="111", nickname="BOA")
    broken = create_account(db, organization, ml_user_id="222", nickname="RUIM", is_primary=False)
    setup_marketplace(api)

    def orders(query, kwargs):
        if query["seller"] == "222":
            return FakeResponse(503, {"message": "fora do ar"})
        return FakeResponse(200, {"results": [order(1)], "paging": {"total": 1, "offset": 0, "limit": 50}})

    api.add_handler("GET", "/orders/search", orders)

    result = SyncService(db, sdk_factory).sync_organization(organization.id)

    assert result["success"] is False
    by_account = {entry["account_id"]: entry for entry in result["accounts"]}
    assert by_account[healthy.id]["success"] is True
    assert by_account[broken.id]["success"] is False
    assert by_account[broken.id]["error"] == "fora do ar"
    assert db.query(MLOrder).count() == 1


def test_malformed_payload_does_not_stop_others(db, api, sdk_factory, organization):
    healthy = create_account(db, organization, ml_user_id="111", nickname="BOA")
    broken = create_account(db, organization, ml_user_id="222", nickname="RUIM", is_primary=False)
    setup_marketplace(api)

    def orders(query, kwargs):
        payload = order(1) if query["seller"] == "111" else {**order(2), "buyer": {"nickname": "SEM_ID"}}
        return FakeResponse(200, {"results": [payload], "paging": {"total": 1, "offset": 0, "limit": 50}})

    api.add_handler("GET", "/orders/search", orders)

    result = SyncService(db, sdk_factory).sync_organization(organization.id)

    by_account = {entry["account_id"]: entry for entry in result["accounts"]}
    assert by_account[healthy.id]["success"] is True
    assert by_account[broken.id]["success"] is False
    assert by_account[broken.id]["error"].startswith("ValidationError")
    assert [row.ml_order_id for row in db.query(MLOrder)] == [1]


def test_auto_sync_continues_after_malformed_account(db, api, sdk_factory, organization):
    create_account(db, organization, ml_user_id="222", nickname="RUIM")
    other = create_organization(db, name="Outra Loja")
    create_account(db, other, ml_user_id="111", nickname="BOA")
    setup_marketplace(api)

    def orders(query, kwargs):
        payload = order(1) if query["seller"] == "111" else {**order(2), "buyer": {"nickname": "SEM_ID"}}
        return FakeResponse(200, {"results": [payload], "paging": {"total": 1, "offset": 0, "limit": 50}})

    api.add_handler("GET", "/orders/search", orders)

    result = AutoSyncService(SessionLocal, sdk_factory).sync_all_organizations()

    assert result["failed_accounts"] == 1
    assert db.query(MLOrder).filter(MLOrder.organization_id == other.id).count() == 1


def test_orders_are_scoped_to_organization(db, api, sdk_factory, organization):
    other = create_organization(db, name="Outra Loja")
    first = create_account(db, organization)
    second = create_account(db, other)
    setup_marketplace(api, orders=[order(1)])
    service = SyncService(db, sdk_factory)

    service.sync_account_orders(first, sdk=sdk_factory(access_token="x"))
    service.sync_account_orders(second, sdk=sdk_factory(access_token="x"))

    assert db.query(MLOrder).count() == 2
    assert {row.organization_id for row in db.query(MLOrder)} == {organization.id, other.id}


def test_auto_sync_without_accounts(sdk_factory):
    result = AutoSyncService(SessionLocal, sdk_factory).sync_all_organizations()

    assert result == {"success": True, "message": "Nenhuma organização com contas ativas"}


def test_auto_sync_all_organizations(db, api, sdk_factory, organization):
    create_account(db, organization)
    setup_marketplace(api)

    result = AutoSyncService(SessionLocal, sdk_factory).sync_all_organizations()

    assert result["failed_accounts"] == 0
    assert result["message"] == "1 organizações sincronizadas, 0 contas com erro"
    assert db.query(MLOrder).count() == 2


def test_auto_refresh_tokens(db, api, sdk_factory, organization):
    create_account(db, organization, expires_in=timedelta(minutes=10))
    api.add("POST", "/oauth/token", {"access_token": "APP_USR-auto", "expires_in": 21600, "refresh_token": "TG-auto"})

    result = AutoSyncService(SessionLocal, sdk_factory).refresh_tokens()

    assert result == {"success": True, "checked": 1, "refreshed": 1, "failed": 0}
