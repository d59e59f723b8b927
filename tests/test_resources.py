import pytest

from tests.fakes import FakeSession, make_client

BASE_URL = "https://api.mercadolibre.com"


@pytest.fixture
def api():
    return FakeSession(default_body={})


@pytest.fixture
def sdk(api):
    return make_client(api, access_token="APP_USR-1")


@pytest.mark.parametrize("call, method, path", [
    # sites e busca
    (lambda sdk: sdk.sites.get_listing_prices("MLB", price=100, category_id="X"),
     "GET", "/sites/MLB/listing_prices?price=100&category_id=X"),
    (lambda sdk: sdk.sites.get_listing_prices("MLB", price=100),
     "GET", "/sites/MLB/listing_prices?price=100"),
    (lambda sdk: sdk.sites.list(), "GET", "/sites"),
    (lambda sdk: sdk.search.by_query("iphone", limit=10), "GET", "/sites/MLB/search?q=iphone&limit=10"),
    (lambda sdk: sdk.search.by_price_range(10, 20), "GET", "/sites/MLB/search?price=10-20"),
    (lambda sdk: sdk.search.search(q="tênis", site_id="MLA"), "GET", "/sites/MLA/search?q=t%C3%AAnis"),
    # usuários e anúncios
    (lambda sdk: sdk.users.get_me(), "GET", "/users/me"),
    (lambda sdk: sdk.users.search_items(111), "GET", "/users/111/items/search"),
    (lambda sdk: sdk.users.search_items(111, status="active", limit=50),
     "GET", "/users/111/items/search?status=active&limit=50"),
    (lambda sdk: sdk.items.get("MLB123456789", attributes=["id", "price"]),
     "GET", "/items/MLB123456789?attributes=id,price"),
    (lambda sdk: sdk.items.get_by_ids(["MLB1", "MLB2"]), "GET", "/items?ids=MLB1,MLB2"),
    (lambda sdk: sdk.items.create({"title": "x"}), "POST", "/items"),
    (lambda sdk: sdk.items.update_description("MLB1", "texto"), "PUT", "/items/MLB1/description?api_version=2"),
    (lambda sdk: sdk.items.get_price_to_win("MLB1"), "GET", "/items/MLB1/price_to_win?site_id=MLB&version=v2"),
    (lambda sdk: sdk.variations.update_stock("MLB1", 7, 3), "PUT", "/items/MLB1/variations/7"),
    (lambda sdk: sdk.pictures.get("P1"), "GET", "/pictures/P1"),
    (lambda sdk: sdk.categories.get("MLB1051"), "GET", "/categories/MLB1051"),
    (lambda sdk: sdk.categories.get("a b/c"), "GET", "/categories/a%20b%2Fc"),
    # pedidos e pós-venda
    (lambda sdk: sdk.orders.get(2000001), "GET", "/orders/2000001"),
    (lambda sdk: sdk.orders.search(seller=111, status="paid", sort="date_desc", limit=50),
     "GET", "/orders/search?seller=111&order.status=paid&sort=date_desc&limit=50"),
    (lambda sdk: sdk.orders.get_by_seller(111), "GET", "/orders/search?seller=111&sort=date_desc"),
    (lambda sdk: sdk.questions.get(5), "GET", "/questions/5?api_version=4"),
    (lambda sdk: sdk.questions.get_by_seller(111, status="UNANSWERED", limit=10),
     "GET", "/questions/search?seller_id=111&status=UNANSWERED&sort_fields=date_created&sort_types=DESC"
            "&api_version=4&limit=10"),
    (lambda sdk: sdk.questions.answer(5, "Sim"), "POST", "/answers"),
    (lambda sdk: sdk.messages.get_pack(99, 111), "GET", "/messages/packs/99/sellers/111?tag=post_sale"),
    (lambda sdk: sdk.claims.search(status="opened"), "GET", "/post-purchase/v1/claims/search?status=opened"),
    (lambda sdk: sdk.feedback.reply(9, "obrigado"), "POST", "/feedback/9/reply"),
    (lambda sdk: sdk.shipments.get_label([1, 2]), "GET", "/shipment_labels?shipment_ids=1,2&response_type=pdf"),
    (lambda sdk: sdk.payments.refund(1, 10.5), "POST", "/payments/1/refunds"),
    # logística
    (lambda sdk: sdk.flex.get_coverage_zones(111),
     "GET", "/flex/sites/MLB/users/111/configuration/coverage/zones/v1?show_availables=true"),
    (lambda sdk: sdk.fulfillment.get_stock("INV1"), "GET", "/inventories/INV1/stock/fulfillment"),
    (lambda sdk: sdk.locations.get_zip_code("01310-100"), "GET", "/countries/BR/zip_codes/01310100"),
    # vendedor
    (lambda sdk: sdk.moderations.get_paused_items(111),
     "GET", "/users/111/items/search?status=paused&tags=moderation_penalty"),
    (lambda sdk: sdk.notifications.list_missed(123, topic="orders_v2"),
     "GET", "/missed_feeds?app_id=123&topic=orders_v2"),
    (lambda sdk: sdk.promotions.list(111), "GET", "/seller-promotions/users/111?app_version=v2"),
    (lambda sdk: sdk.reports.list(report_type="bulk"), "GET", "/reports?type=bulk"),
    (lambda sdk: sdk.reputation.get_item_performance("MLB1"), "GET", "/item/MLB1/performance"),
    (lambda sdk: sdk.trends.get_by_category("MLB1055"), "GET", "/trends/MLB/MLB1055"),
    (lambda sdk: sdk.visits.get_items_visits(["MLB1", "MLB2"]), "GET", "/items/visits?ids=MLB1,MLB2"),
    (lambda sdk: sdk.currencies.convert("USD", "BRL"), "GET", "/currency_conversions/search?from=USD&to=BRL"),
    (lambda sdk: sdk.favorites.remove("MLB1"), "DELETE", "/users/me/bookmarks/MLB1"),
    (lambda sdk: sdk.catalog.search_products(q="iphone"), "GET", "/products/search?site_id=MLB&q=iphone"),
    (lambda sdk: sdk.pricing.get_price_to_win("MLB1"), "GET", "/items/MLB1/price_to_win?site_id=MLB&version=v2"),
    (lambda sdk: sdk.billing.get_periods(), "GET", "/billing/integration/monthly/periods?group=ML&document_type=BILL"),
    (lambda sdk: sdk.advertising.search_ads("A1", status="active"),
     "GET", "/advertising/product_ads/advertisers/A1/ads/search?filters%5Bstatus%5D=active"),
])
def test_resource_url_mapping(sdk, api, call, method, path):
    call(sdk)

    request = api.last_call()
    assert request["method"] == method
    assert request["url"] == BASE_URL + path


def test_answer_sends_question_id_as_int(sdk, api):
    sdk.questions.answer("5", "Sim, temos em estoque")
    assert api.last_call()["json"] == {"question_id": 5, "text": "Sim, temos em estoque"}


def test_item_delete_closes_before_marking_deleted(sdk, api):
    sdk.items.delete("MLB1")

    bodies = [call["json"] for call in api.calls_to("/items/MLB1", "PUT")]
    assert bodies == [{"status": "closed"}, {"deleted": "true"}]


def test_picture_upload_is_multipart(sdk, api):
    sdk.pictures.upload("foto.jpg", b"\xff\xd8", "image/jpeg")

    request = api.last_call()
    assert request["files"] == {"file": ("foto.jpg", b"\xff\xd8", "image/jpeg")}
    assert "Content-Type" not in request["headers"]
    assert "json" not in request


def test_site_id_follows_client_configuration(api):
    sdk = make_client(api, site_id="MLA")
    sdk.trends.get_by_site()
    assert api.last_call()["url"] == BASE_URL + "/trends/MLA"


def test_users_is_blocked_handles_not_found():
    api = FakeSession()
    sdk = make_client(api, access_token="x")
    assert sdk.users.is_blocked(111) is False

    api.add("GET", "/users/111/blocked", {"blocked": True})
    assert sdk.users.is_blocked(111) is True


def test_currencies_usd_rate(api, sdk):
    api.add("GET", "/currency_conversions/search", {"ratio": 5.1})
    assert sdk.currencies.get_usd_rate() == 5.1
