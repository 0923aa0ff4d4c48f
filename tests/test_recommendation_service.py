import pytest
from sqlalchemy.exc import OperationalError

from models import Action, Mode, UserHistory
from services.recommendation import RecommendationService
from sqlmodel import select


def boom(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is gone"))


def test_track_records_event(session, factory):
    user = factory.user()
    store = factory.store()
    product = factory.product(store)

    assert RecommendationService(session).track(user.id, "shop", product.id, store.id, "search")

    rows = session.exec(select(UserHistory).where(UserHistory.user_id == user.id)).all()
    assert len(rows) == 1
    assert rows[0].action == Action.SEARCH


def test_track_storage_failure_returns_false(session, factory, monkeypatch):
    user = factory.user()
    store = factory.store()
    product = factory.product(store, popularity=3)
    svc = RecommendationService(session)
    monkeypatch.setattr(svc.popularity, "increment", boom)

    assert svc.track(user.id, Mode.SHOP, product.id, store.id, Action.VIEW) is False

    # the appended row is rolled back with the failed increment
    assert session.exec(select(UserHistory)).all() == []


def test_track_rejects_unknown_action(session, factory):
    user = factory.user()
    assert RecommendationService(session).track(user.id, Mode.SHOP, 1, 1, "like") is False


def test_recommend_returns_item_shape(session, factory):
    user = factory.user()
    store = factory.store()
    product = factory.product(store, name="Lamp", popularity=4, price=30.0)

    items = RecommendationService(session).recommend(user.id, Mode.SHOP, 5)

    assert items == [{
        "id": product.id,
        "name": "Lamp",
        "price": 30.0,
        "image": product.image_url,
        "storeId": store.id,
    }]


def test_recommend_failure_returns_empty_list(session, factory, monkeypatch):
    user = factory.user()
    factory.product(factory.store(), popularity=4)
    svc = RecommendationService(session)
    monkeypatch.setattr(svc.selectors[Mode.SHOP], "select", boom)

    assert svc.recommend(user.id, Mode.SHOP, 5) == []


def test_recommend_unknown_mode_returns_empty_list(session, factory):
    user = factory.user()
    factory.product(factory.store(), popularity=4)

    assert RecommendationService(session).recommend(user.id, "travel", 5) == []


def test_clear_failure_returns_false(session, factory, monkeypatch):
    user = factory.user()
    svc = RecommendationService(session)
    monkeypatch.setattr(svc.history, "clear", boom)

    assert svc.clear_history(user.id) is False


def test_dispatch_by_mode(session, factory):
    user = factory.user()
    factory.product(factory.store(), name="gadget", popularity=10)
    factory.product(factory.store(store_type=Mode.FOOD), name="noodles", popularity=5, cuisine="Thai")
    svc = RecommendationService(session)

    assert [i["name"] for i in svc.get_food_recommendations(user.id, 5)] == ["noodles"]
    assert [i["name"] for i in svc.get_shop_recommendations(user.id, 5)] == ["gadget", "noodles"]


def test_default_limit_is_ten(session, factory):
    user = factory.user()
    store = factory.store()
    for i in range(15):
        factory.product(store, popularity=i)

    assert len(RecommendationService(session).recommend(user.id)) == 10


def test_concrete_scenario(session, factory):
    user = factory.user()
    store = factory.store()
    a = factory.product(store, name="A", popularity=50)
    b = factory.product(store, name="B", popularity=30)
    c = factory.product(store, name="C", popularity=10)
    factory.product(store, name="D", popularity=None)

    items = RecommendationService(session).get_shop_recommendations(user.id, 3)

    assert [i["id"] for i in items] == [a.id, b.id, c.id]


@pytest.mark.parametrize("limit", [1, 3, 50])
def test_track_then_recommend_excludes_tracked_item(session, factory, limit):
    user = factory.user()
    store = factory.store()
    category = factory.category()
    products = [factory.product(store, popularity=i + 1, category=category) for i in range(8)]
    svc = RecommendationService(session)

    svc.track(user.id, Mode.SHOP, products[-1].id, store.id, Action.VIEW)
    items = svc.recommend(user.id, Mode.SHOP, limit)

    assert len(items) <= limit
    assert products[-1].id not in {i["id"] for i in items}
