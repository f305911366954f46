"""HTTP tests for the Yoco webhook."""

from app.models.order import OrderStatus, PrintOrder


def create_order(client, pdf_factory):
    return client.post(
        "/create-order",
        files={"file": ("doc.pdf", pdf_factory(1), "application/pdf")}
    ).json()


def event(checkout_id, status="succeeded"):
    return {"type": "payment.succeeded", "payload": {"id": checkout_id, "status": status}}


class TestYocoWebhook:
    def test_marks_order_paid_and_is_idempotent(self, client, db_session, pdf_factory):
        code = create_order(client, pdf_factory)["code"]

        first = client.post("/webhook/yoco", json=event("ch_test_123"))
        assert first.status_code == 200
        assert first.text == "OK"

        order = db_session.query(PrintOrder).filter(PrintOrder.code == code).one()
        db_session.refresh(order)
        assert order.status == OrderStatus.PAID.value
        assert order.paid_at is not None

        second = client.post("/webhook/yoco", json=event("ch_test_123"))
        assert second.status_code == 200
        db_session.refresh(order)
        assert order.status == OrderStatus.PAID.value

    def test_pending_event_is_ignored(self, client, db_session, pdf_factory):
        code = create_order(client, pdf_factory)["code"]

        response = client.post("/webhook/yoco", json=event("ch_test_123", status="pending"))
        assert response.status_code == 200
        assert response.text == "Ignored"

        order = db_session.query(PrintOrder).filter(PrintOrder.code == code).one()
        assert order.status == OrderStatus.PENDING_PAYMENT.value

    def test_unknown_checkout(self, client, db_session, pdf_factory):
        code = create_order(client, pdf_factory)["code"]

        response = client.post("/webhook/yoco", json=event("ch_nobody"))
        assert response.status_code == 404
        assert response.text == "Order not found"
        order = db_session.query(PrintOrder).filter(PrintOrder.code == code).one()
        assert order.status == OrderStatus.PENDING_PAYMENT.value

    def test_missing_id(self, client):
        response = client.post("/webhook/yoco", json={"payload": {"status": "succeeded"}})
        assert response.status_code == 400
        assert response.text == "Missing checkout id"

    def test_non_json_body(self, client):
        response = client.post(
            "/webhook/yoco",
            content=b"not json",
            headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
