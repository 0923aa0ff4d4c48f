import pytest

from models import Action, Mode
from services.recommendation import PopularityCounter, RecommendationService


@pytest.mark.parametrize("mode,action,expected", [
    (Mode.SHOP, Action.VIEW, True),
    (Mode.SHOP, Action.ORDER, True),
    (Mode.SHOP, Action.SEARCH, False),
    (Mode.FOOD, Action.VIEW, False),
    (Mode.FOOD, Action.ORDER, False),
])
def test_qualifying_actions(mode, action, expected):
    assert PopularityCounter.qualifies(mode, action) is expected


def test_increment_starts_null_at_one(session, factory):
    product = factory.product(factory.store(), popularity=None)
    counter = PopularityCounter(session)

    assert counter.increment(product.id) == 1
    session.commit()

    assert counter.get(product.id) == 1


def test_increment_unknown_item_touches_nothing(session):
    assert PopularityCounter(session).increment(999_999) == 0


def test_view_and_order_raise_popularity_by_exactly_n(session, factory):
    user = factory.user()
    store = factory.store()
    product = factory.product(store, popularity=7)
    svc = RecommendationService(session)

    actions = [Action.VIEW, Action.ORDER, Action.VIEW, Action.SEARCH, Action.SEARCH]
    for action in actions:
        assert svc.track(user.id, Mode.SHOP, product.id, store.id, action)

    counted = sum(1 for a in actions if a != Action.SEARCH)
    assert PopularityCounter(session).get(product.id) == 7 + counted


def test_search_never_changes_popularity(session, factory):
    user = factory.user()
    store = factory.store()
    product = factory.product(store, popularity=None)
    svc = RecommendationService(session)

    for _ in range(3):
        svc.track(user.id, Mode.SHOP, product.id, store.id, Action.SEARCH)

    assert PopularityCounter(session).get(product.id) is None


def test_food_actions_do_not_count(session, factory):
    user = factory.user()
    kitchen = factory.store(store_type=Mode.FOOD)
    dish = factory.product(kitchen, popularity=3)
    svc = RecommendationService(session)

    svc.track(user.id, Mode.FOOD, dish.id, kitchen.id, Action.ORDER)
    svc.track(user.id, Mode.FOOD, dish.id, kitchen.id, Action.VIEW)

    assert PopularityCounter(session).get(dish.id) == 3
