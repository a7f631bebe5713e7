"""Tests for menu, customer and inventory management."""

from datetime import datetime
from decimal import Decimal

import pytest

from billgenie.models.customer import Customer
from billgenie.models.inventory import InventoryItem
from billgenie.models.restaurant import MenuItem

NEW_MENU_ITEM = {
    "name": "Tiramisu",
    "description": "Coffee-soaked sponge with mascarpone",
    "category": "Desserts",
    "price": 7.25,
    "preparationTime": 5,
    "ingredients": ["Mascarpone", "Coffee"],
    "nutritionalInfo": {"calories": 450},
}

NEW_CUSTOMER = {
    "firstName": "Grace",
    "lastName": "Hopper",
    "email": "Grace.Hopper@Navy.MIL",
    "phone": "+15550199",
    "address": {"street": "1 Harbor Rd", "city": "Arlington", "zipCode": "22201"},
    "allergies": ["Peanuts"],
}

NEW_STOCK = {
    "itemName": "Flour",
    "category": "Dry Goods",
    "quantity": 20,
    "unit": "kg",
    "reorderLevel": 5,
    "supplier": "Mill & Co",
    "costPerUnit": 1.2,
}


@pytest.fixture
def stock(db_session):
    items = [
        InventoryItem(item_name="Tomatoes", category="Produce", quantity=Decimal("3"), unit="kg",
                      reorder_level=Decimal("5"), supplier="Farm", cost_per_unit=Decimal("2.50")),
        InventoryItem(item_name="Basil", category="Produce", quantity=Decimal("5"), unit="bunch",
                      reorder_level=Decimal("5"), supplier="Farm", cost_per_unit=Decimal("1.00")),
        InventoryItem(item_name="Mozzarella", category="Dairy", quantity=Decimal("12"), unit="kg",
                      reorder_level=Decimal("4"), supplier="Dairy Co", cost_per_unit=Decimal("8.00")),
    ]
    db_session.add_all(items)
    db_session.commit()
    return items


class TestMenu:
    def test_public_read(self, client, test_menu_item, second_menu_item):
        resp = client.get("/api/menu")
        assert resp.status_code == 200
        names = [i["name"] for i in resp.json()["data"]]
        assert names == ["Margherita Pizza", "Caesar Salad"]

        resp = client.get(f"/api/menu/{test_menu_item.id}")
        data = resp.json()["data"]
        assert data["price"] == 12.5
        assert data["nutritionalInfo"]["calories"] == 800
        assert data["allergens"] == ["Dairy", "Gluten"]

    def test_filters(self, client, db_session, test_menu_item, second_menu_item):
        second_menu_item.available = False
        db_session.commit()

        resp = client.get("/api/menu", params={"category": "Salads"})
        assert [i["name"] for i in resp.json()["data"]] == ["Caesar Salad"]

        resp = client.get("/api/menu", params={"available": "true"})
        assert [i["name"] for i in resp.json()["data"]] == ["Margherita Pizza"]

    def test_sorted_by_category_then_name(self, client, db_session):
        db_session.add_all([
            MenuItem(name="Zucchini Pizza", description="-", category="Pizza", price=Decimal("11"), preparation_time=15),
            MenuItem(name="Brownie", description="-", category="Desserts", price=Decimal("4"), preparation_time=2),
            MenuItem(name="Anchovy Pizza", description="-", category="Pizza", price=Decimal("11"), preparation_time=15),
        ])
        db_session.commit()
        names = [i["name"] for i in client.get("/api/menu").json()["data"]]
        assert names == ["Brownie", "Anchovy Pizza", "Zucchini Pizza"]

    def test_manager_writes(self, client, manager_headers):
        resp = client.post("/api/menu", json=NEW_MENU_ITEM, headers=manager_headers)
        assert resp.status_code == 201
        item = resp.json()["data"]
        assert item["available"] is True
        assert item["nutritionalInfo"]["calories"] == 450

        resp = client.put(f"/api/menu/{item['id']}", json={"price": 7.75, "available": False}, headers=manager_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["price"] == 7.75
        assert resp.json()["data"]["name"] == "Tiramisu"

        resp = client.delete(f"/api/menu/{item['id']}", headers=manager_headers)
        assert resp.json()["success"] is True
        assert resp.json()["message"] == "Menu item deleted successfully"
        assert client.get(f"/api/menu/{item['id']}").status_code == 404

    @pytest.mark.parametrize("headers_fixture", ["waiter_headers", "chef_headers", "cashier_headers"])
    def test_staff_cannot_write(self, client, request, headers_fixture, test_menu_item):
        headers = request.getfixturevalue(headers_fixture)
        assert client.post("/api/menu", json=NEW_MENU_ITEM, headers=headers).status_code == 403
        assert client.delete(f"/api/menu/{test_menu_item.id}", headers=headers).status_code == 403

    def test_anonymous_cannot_write(self, client):
        assert client.post("/api/menu", json=NEW_MENU_ITEM).status_code == 401

    def test_negative_price_rejected(self, client, manager_headers):
        resp = client.post("/api/menu", json=dict(NEW_MENU_ITEM, price=-1), headers=manager_headers)
        assert resp.status_code == 400

    def test_delete_keeps_order_lines(self, client, auth_headers, manager_headers, order_payload, test_menu_item):
        order = client.post("/api/orders", json=order_payload, headers=auth_headers).json()["data"]

        resp = client.delete(f"/api/menu/{test_menu_item.id}", headers=manager_headers)
        assert resp.status_code == 200

        line = client.get(f"/api/orders/{order['id']}", headers=auth_headers).json()["data"]["items"][0]
        assert line["menuItemId"] is None
        assert line["menuItem"] is None
        assert line["price"] == 12.5

    def test_missing_item(self, client):
        resp = client.get("/api/menu/9999")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Menu item not found"


class TestCustomers:
    def test_create_normalizes_email_and_zeroes_counters(self, client, auth_headers):
        body = dict(NEW_CUSTOMER, totalOrders=50, totalSpent=1000, loyaltyPoints=1000)
        resp = client.post("/api/customers", json=body, headers=auth_headers)
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["email"] == "grace.hopper@navy.mil"
        assert data["totalOrders"] == 0
        assert data["totalSpent"] == 0
        assert data["loyaltyPoints"] == 0
        assert data["address"]["zipCode"] == "22201"

    def test_duplicate_email(self, client, auth_headers, test_customer):
        body = dict(NEW_CUSTOMER, email="ADA@example.com")
        resp = client.post("/api/customers", json=body, headers=auth_headers)
        assert resp.status_code == 400

    def test_invalid_email(self, client, auth_headers):
        resp = client.post("/api/customers", json=dict(NEW_CUSTOMER, email="not-an-email"), headers=auth_headers)
        assert resp.status_code == 400

    def test_list_get_update(self, client, auth_headers, test_customer):
        resp = client.get("/api/customers", headers=auth_headers)
        assert [c["email"] for c in resp.json()["data"]] == ["ada@example.com"]

        resp = client.put(
            f"/api/customers/{test_customer.id}",
            json={"phone": "+1555000222", "preferences": ["Booth"]},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["phone"] == "+1555000222"
        assert data["preferences"] == ["Booth"]
        assert data["firstName"] == "Ada"

    def test_update_cannot_touch_counters(self, client, auth_headers, test_customer):
        client.put(f"/api/customers/{test_customer.id}", json={"totalSpent": 999}, headers=auth_headers)
        data = client.get(f"/api/customers/{test_customer.id}", headers=auth_headers).json()["data"]
        assert data["totalSpent"] == 0

    def test_order_history(self, client, auth_headers, order_payload, test_customer):
        client.post("/api/orders", json=order_payload, headers=auth_headers)
        mine = client.post(
            "/api/orders", json=dict(order_payload, customerId=test_customer.id), headers=auth_headers
        ).json()["data"]

        resp = client.get(f"/api/customers/{test_customer.id}/orders", headers=auth_headers)
        assert resp.status_code == 200
        assert [o["id"] for o in resp.json()["data"]] == [mine["id"]]

    def test_delete_requires_manager(self, client, db_session, auth_headers, manager_headers, test_customer):
        assert client.delete(f"/api/customers/{test_customer.id}", headers=auth_headers).status_code == 403

        resp = client.delete(f"/api/customers/{test_customer.id}", headers=manager_headers)
        assert resp.status_code == 200
        assert resp.json()["message"] == "Customer deleted successfully"
        assert db_session.query(Customer).count() == 0

    def test_missing_customer(self, client, auth_headers):
        resp = client.get("/api/customers/9999", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["error"] == "Customer not found"


class TestInventory:
    def test_list_sorted_by_name(self, client, auth_headers, stock):
        resp = client.get("/api/inventory", headers=auth_headers)
        assert resp.status_code == 200
        assert [i["itemName"] for i in resp.json()["data"]] == ["Basil", "Mozzarella", "Tomatoes"]

    def test_low_stock_filter(self, client, auth_headers, stock):
        resp = client.get("/api/inventory", params={"lowStock": "true"}, headers=auth_headers)
        data = resp.json()["data"]
        assert [i["itemName"] for i in data] == ["Basil", "Tomatoes"]
        assert all(i["isLowStock"] for i in data)

    def test_category_filter(self, client, auth_headers, stock):
        resp = client.get("/api/inventory", params={"category": "Dairy"}, headers=auth_headers)
        assert [i["itemName"] for i in resp.json()["data"]] == ["Mozzarella"]

    def test_create_and_update(self, client, manager_headers):
        resp = client.post("/api/inventory", json=NEW_STOCK, headers=manager_headers)
        assert resp.status_code == 201
        item = resp.json()["data"]
        assert item["isLowStock"] is False
        assert item["lastRestocked"] is not None

        resp = client.put(f"/api/inventory/{item['id']}", json={"quantity": 4}, headers=manager_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["isLowStock"] is True

    def test_staff_cannot_write(self, client, auth_headers, stock):
        assert client.post("/api/inventory", json=NEW_STOCK, headers=auth_headers).status_code == 403
        resp = client.patch(f"/api/inventory/{stock[0].id}/restock", json={"quantity": 1}, headers=auth_headers)
        assert resp.status_code == 403

    def test_restock(self, client, manager_headers, stock):
        tomatoes = stock[0]
        before = tomatoes.last_restocked
        resp = client.patch(
            f"/api/inventory/{tomatoes.id}/restock", json={"quantity": 7.5}, headers=manager_headers
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["quantity"] == 10.5
        assert data["isLowStock"] is False
        assert datetime.fromisoformat(data["lastRestocked"]).replace(tzinfo=None) >= before.replace(tzinfo=None)

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_restock_requires_positive_quantity(self, client, manager_headers, stock, quantity):
        resp = client.patch(
            f"/api/inventory/{stock[0].id}/restock", json={"quantity": quantity}, headers=manager_headers
        )
        assert resp.status_code == 400

    def test_delete(self, client, db_session, manager_headers, stock):
        resp = client.delete(f"/api/inventory/{stock[0].id}", headers=manager_headers)
        assert resp.json()["message"] == "Inventory item deleted successfully"
        assert db_session.query(InventoryItem).count() == 2

    def test_missing_item(self, client, auth_headers, manager_headers):
        resp = client.get("/api/inventory/9999", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Inventory item not found"}
        resp = client.patch("/api/inventory/9999/restock", json={"quantity": 1}, headers=manager_headers)
        assert resp.status_code == 404
