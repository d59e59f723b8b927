from mlhub.models.saas_models import MLAccount
from tests.conftest import create_account

BASE = "/api/v1/mercadolivre"


# Anúncios

def test_create_item_sends_description_inline(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("POST", "/items", {"id": "MLB900", "status": "active"})

    response = client.post(f"{BASE}/items", json={
        "title": "Camiseta Azul",
        "category_id": "MLB31447",
        "price": 59.9,
        "available_quantity": 10,
        "description": "Algodão 100%",
        "pictures": [{"source": "https://img.example.com/1.jpg"}],
    }, headers=headers)

    assert response.status_code == 200
    assert response.json()["id"] == "MLB900"
    body = api.last_call()["json"]
    assert body["description"] == {"plain_text": "Algodão 100%"}
    assert body["pictures"] == [{"source": "https://img.example.com/1.jpg"}]
    assert body["listing_type_id"] == "gold_special"
    assert body["currency_id"] == "BRL"


def test_create_item_requires_title_and_price(client, headers, db, organization):
    create_account(db, organization)

    response = client.post(f"{BASE}/items", json={"category_id": "MLB31447", "available_quantity": 1}, headers=headers)

    assert response.status_code == 422


def test_delete_item_closes_before_deleting(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("PUT", "/items/MLB1", {"id": "MLB1"})

    response = client.delete(f"{BASE}/items/MLB1", headers=headers)

    assert response.status_code == 200
    assert [call["json"] for call in api.calls_to("/items/MLB1", "PUT")] == [
        {"status": "closed"},
        {"deleted": "true"},
    ]


def test_relist_is_not_an_item_action(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("POST", "/items/MLB1/relist", {"id": "MLB2"})

    response = client.post(f"{BASE}/items/MLB1/relist", json={"price": 50, "quantity": 3}, headers=headers)

    assert response.status_code == 200
    assert response.json()["id"] == "MLB2"
    assert api.last_call()["json"] == {"price": 50.0, "quantity": 3, "listing_type_id": "gold_special"}


def test_item_description(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/items/MLB1/description", {"plain_text": "Antiga"})
    api.add("PUT", "/items/MLB1/description", {"plain_text": "Nova"})

    assert client.get(f"{BASE}/items/MLB1/description", headers=headers).json() == {"plain_text": "Antiga"}

    response = client.put(f"{BASE}/items/MLB1/description", json={"plain_text": "Nova"}, headers=headers)
    assert response.status_code == 200
    call = api.last_call()
    assert call["query"] == {"api_version": "2"}
    assert call["json"] == {"plain_text": "Nova"}


def test_item_promotions_and_reviews(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/seller-promotions/items/MLB1", [{"id": "P-1", "type": "DEAL"}])
    api.add("GET", "/reviews/item/MLB1", {"rating_average": 4.8, "reviews": []})

    promotions = client.get(f"{BASE}/items/MLB1/promotions", headers=headers)
    assert promotions.json() == [{"id": "P-1", "type": "DEAL"}]
    assert api.last_call()["query"] == {"app_version": "v2"}

    reviews = client.get(f"{BASE}/items/MLB1/reviews?limit=5", headers=headers)
    assert reviews.json()["rating_average"] == 4.8
    assert api.last_call()["query"] == {"offset": "0", "limit": "5"}


# Pedidos

def test_order_notes(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/orders/123/notes", [{"order_id": 123, "results": [{"id": "n1", "note": "Embalar"}]}])
    api.add("POST", "/orders/123/notes", {"note": {"id": "n2", "note": "Presente"}})
    api.add("DELETE", "/orders/123/notes/n1")

    notes = client.get(f"{BASE}/orders/123/notes", headers=headers).json()
    assert notes[0]["results"][0]["note"] == "Embalar"

    response = client.post(f"{BASE}/orders/123/notes", json={"note": "Presente"}, headers=headers)
    assert response.status_code == 200
    assert api.last_call()["json"] == {"note": "Presente"}

    assert client.delete(f"{BASE}/orders/123/notes/n1", headers=headers).json() == {"success": True}
    assert api.last_call()["method"] == "DELETE"


def test_order_feedback_and_reply(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/orders/123/feedback", {"sale": {"id": 77, "rating": "positive"}})
    api.add("POST", "/feedback/77/reply", {"reply": "Obrigado!"})

    feedback = client.get(f"{BASE}/orders/123/feedback", headers=headers).json()
    assert feedback["sale"]["id"] == 77

    response = client.post(f"{BASE}/feedback/77/reply", json={"text": "Obrigado!"}, headers=headers)
    assert response.status_code == 200
    assert api.last_call()["json"] == {"reply": "Obrigado!"}


# Envios

def test_shipment_and_history(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/shipments/4000", {"id": 4000, "status": "ready_to_ship"})
    api.add("GET", "/shipments/4000/history", [{"status": "handling"}])

    assert client.get(f"{BASE}/shipments/4000", headers=headers).json()["status"] == "ready_to_ship"
    assert client.get(f"{BASE}/shipments/4000/history", headers=headers).json() == [{"status": "handling"}]


def test_shipment_label_is_returned_as_pdf(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/shipment_labels", b"%PDF-1.4 etiqueta", headers={"Content-Type": "application/pdf"})

    response = client.get(f"{BASE}/shipments/4000/label", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/pdf")
    assert 'filename="etiqueta_4000.pdf"' in response.headers["content-disposition"]
    assert response.content == b"%PDF-1.4 etiqueta"
    assert api.last_call()["query"] == {"shipment_ids": "4000", "response_type": "pdf"}


def test_shipment_label_rejects_unknown_format(client, headers, db, organization):
    create_account(db, organization)

    assert client.get(f"{BASE}/shipments/4000/label?response_type=png", headers=headers).status_code == 422


def test_ready_to_ship(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("POST", "/shipments/4000/process/ready_to_ship", {"status": "ready_to_ship"})

    response = client.post(f"{BASE}/shipments/4000/ready-to-ship", headers=headers)

    assert response.status_code == 200
    assert api.last_call()["path"] == "/shipments/4000/process/ready_to_ship"


# Mensagens

def test_pack_messages_use_account_as_seller(client, api, headers, db, organization):
    create_account(db, organization, ml_user_id="111")
    api.add("GET", "/messages/packs/2000/sellers/111", {"messages": [{"text": "Olá"}], "paging": {"total": 1}})

    data = client.get(f"{BASE}/messages/packs/2000?mark_as_read=false", headers=headers).json()

    assert data["messages"][0]["text"] == "Olá"
    assert api.last_call()["query"] == {"tag": "post_sale", "mark_as_read": "false", "offset": "0", "limit": "10"}


def test_send_message_to_buyer(client, api, headers, db, organization):
    create_account(db, organization, ml_user_id="111")
    api.add("POST", "/messages/packs/2000/sellers/111", {"id": "msg-1", "status": "available"})

    response = client.post(f"{BASE}/messages/packs/2000", json={"buyer_id": 555, "text": "Enviado hoje"}, headers=headers)

    assert response.status_code == 200
    assert api.last_call()["json"] == {
        "from": {"user_id": "111"},
        "to": {"user_id": "555"},
        "text": "Enviado hoje",
    }


def test_send_empty_message_is_rejected(client, headers, db, organization):
    create_account(db, organization)

    response = client.post(f"{BASE}/messages/packs/2000", json={"buyer_id": 555, "text": ""}, headers=headers)

    assert response.status_code == 422


def test_unread_messages(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/messages/unread", {"results": [{"resource": "/packs/2000", "count": 2}]})

    data = client.get(f"{BASE}/messages/unread", headers=headers).json()

    assert data["results"][0]["count"] == 2
    assert api.last_call()["query"] == {"role": "seller", "tag": "post_sale"}


# Reclamações

def test_search_claims(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/post-purchase/v1/claims/search", {"data": [{"id": 5, "status": "opened"}], "paging": {"total": 1}})

    data = client.get(f"{BASE}/claims?status=opened", headers=headers).json()

    assert data["data"][0]["id"] == 5
    assert api.last_call()["query"] == {"status": "opened", "offset": "0", "limit": "30"}


def test_claim_detail_and_message(client, api, headers, db, organization):
    create_account(db, organization)
    api.add("GET", "/post-purchase/v1/claims/5", {"id": 5, "stage": "claim"})
    api.add("GET", "/post-purchase/v1/claims/5/messages", [{"message": "Produto com defeito"}])
    api.add("POST", "/post-purchase/v1/claims/5/actions/send-message", {"id": "m-1"})

    assert client.get(f"{BASE}/claims/5", headers=headers).json()["stage"] == "claim"
    assert client.get(f"{BASE}/claims/5/messages", headers=headers).json()[0]["message"] == "Produto com defeito"

    response = client.post(f"{BASE}/claims/5/messages", json={"message": "Vamos trocar"}, headers=headers)
    assert response.status_code == 200
    assert api.last_call()["json"] == {"receiver_role": "complainant", "message": "Vamos trocar"}


def test_claim_not_found_is_kept(client, api, headers, db, organization):
    create_account(db, organization)

    assert client.get(f"{BASE}/claims/999", headers=headers).status_code == 404


# Promoções e reputação

def test_list_promotions_for_account(client, api, headers, db, organization):
    create_account(db, organization, ml_user_id="111")
    api.add("GET", "/seller-promotions/users/111", {"results": [{"id": "P-1"}]})

    data = client.get(f"{BASE}/promotions", headers=headers).json()

    assert data["results"] == [{"id": "P-1"}]
    assert api.last_call()["query"] == {"app_version": "v2"}


def test_reputation_updates_account(client, api, headers, db, organization):
    account = create_account(db, organization, ml_user_id="111")
    api.add("GET", "/users/111", {
        "id": 111,
        "seller_reputation": {"level_id": "4_light_green", "power_seller_status": "silver"},
    })

    data = client.get(f"{BASE}/reputation", headers=headers).json()

    assert data["account_id"] == account.id
    assert data["seller_reputation"]["level_id"] == "4_light_green"
    db.expire_all()
    stored = db.get(MLAccount, account.id)
    assert stored.reputation_level == "4_light_green"
    assert stored.power_seller_status == "silver"


def test_proxies_respect_selected_account(client, api, headers, db, organization):
    create_account(db, organization, ml_user_id="111")
    second = create_account(db, organization, ml_user_id="222", nickname="SEGUNDA", is_primary=False,
                            access_token="APP_USR-second")
    api.add("GET", "/seller-promotions/users/222", {"results": []})

    response = client.get(f"{BASE}/promotions?account_id={second.id}", headers=headers)

    assert response.status_code == 200
    assert api.last_call()["headers"]["Authorization"] == "Bearer APP_USR-second"


def test_post_sale_proxies_without_account(client, headers):
    assert client.get(f"{BASE}/claims", headers=headers).status_code == 404
    assert client.get(f"{BASE}/shipments/4000", headers=headers).status_code == 404
