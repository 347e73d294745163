import pytest

from stayhub.domain.errors import Forbidden, NotFound, PlanLimitExceeded, ValidationError


def _fields(**overrides):
    fields = {"title": "Sea view flat", "location": "Lisbon", "price": 120}
    fields.update(overrides)
    return fields


@pytest.fixture
def basic(subscription_service):
    return subscription_service.subscribe("owner-1", "basic")


@pytest.fixture
def premium(subscription_service):
    return subscription_service.subscribe("owner-2", "premium")


def test_create_applies_defaults(listing_service, basic):
    item = listing_service.create("owner-1", _fields(), basic)

    assert item.owner_id == "owner-1"
    assert item.type == "apartment"
    assert (item.bedrooms, item.bathrooms, item.guests) == (1, 1, 2)
    assert item.amenities == []
    assert item.rating == 0 and item.reviews == 0
    assert item.instant is False
    assert item.premium is False


def test_create_parses_numeric_strings_and_falls_back_on_garbage(listing_service, basic):
    item = listing_service.create(
        "owner-1",
        _fields(price="85.5", bedrooms="3", bathrooms="lots", guests=0),
        basic,
    )
    assert item.price == 85.5
    assert item.bedrooms == 3
    assert item.bathrooms == 1
    assert item.guests == 2


def test_amenities_are_deduplicated(listing_service, basic):
    item = listing_service.create("owner-1", _fields(amenities="wifi, parking ,wifi,"), basic)
    assert item.amenities == ["wifi", "parking"]


@pytest.mark.parametrize("missing", ["title", "location", "price"])
def test_required_fields(listing_service, basic, missing):
    fields = _fields()
    del fields[missing]
    with pytest.raises(ValidationError, match=f"{missing.capitalize()} is required"):
        listing_service.create("owner-1", fields, basic)


@pytest.mark.parametrize("price", ["abc", "nan", "inf", -5])
def test_invalid_price_is_rejected(listing_service, basic, price):
    with pytest.raises(ValidationError):
        listing_service.create("owner-1", _fields(price=price), basic)


def test_basic_plan_is_capped_at_three_listings(listing_service, basic):
    for index in range(3):
        listing_service.create("owner-1", _fields(title=f"Flat {index}"), basic)

    with pytest.raises(PlanLimitExceeded):
        listing_service.create("owner-1", _fields(title="Flat 4"), basic)
    assert len(listing_service.list_mine("owner-1")) == 3


def test_basic_cap_counts_only_own_listings(listing_service, basic, premium):
    for index in range(5):
        listing_service.create("owner-2", _fields(title=f"Villa {index}"), premium)
    listing_service.create("owner-1", _fields(), basic)
    assert len(listing_service.list_mine("owner-1")) == 1


@pytest.mark.parametrize("plan_id", ["premium", "enterprise"])
def test_paid_plans_have_no_cap(listing_service, subscription_service, plan_id):
    subscription = subscription_service.subscribe("owner-3", plan_id)
    for index in range(5):
        listing_service.create("owner-3", _fields(title=f"Home {index}"), subscription)
    assert len(listing_service.list_mine("owner-3")) == 5


def test_premium_flag_is_fixed_at_creation(listing_service, subscription_service, premium):
    item = listing_service.create("owner-2", _fields(), premium)
    assert item.premium is True

    downgraded = subscription_service.subscribe("owner-2", "basic")
    listing_service.create("owner-2", _fields(title="Second"), downgraded)

    assert listing_service.get(item.id).premium is True
    updated = listing_service.update(item.id, "owner-2", {"price": 99, "premium": False})
    assert updated.premium is True


def test_update_merges_patch_and_protects_identity(listing_service, basic, clock):
    item = listing_service.create("owner-1", _fields(), basic)
    clock.advance(hours=2)

    updated = listing_service.update(
        item.id,
        "owner-1",
        {"title": "Renovated flat", "price": "150", "id": "hijack", "ownerId": "intruder", "instant": True},
    )

    assert updated.id == item.id
    assert updated.owner_id == "owner-1"
    assert updated.title == "Renovated flat"
    assert updated.price == 150
    assert updated.instant is True
    assert updated.location == "Lisbon"
    assert updated.updated_at == clock.now
    assert listing_service.get(item.id).title == "Renovated flat"


def test_update_requires_ownership(listing_service, basic):
    item = listing_service.create("owner-1", _fields(), basic)
    with pytest.raises(Forbidden):
        listing_service.update(item.id, "someone-else", {"title": "Mine now"})
    with pytest.raises(NotFound):
        listing_service.update("missing", "owner-1", {"title": "x"})


def test_update_validates_price(listing_service, basic):
    item = listing_service.create("owner-1", _fields(), basic)
    with pytest.raises(ValidationError):
        listing_service.update(item.id, "owner-1", {"price": "free"})


def test_delete(listing_service, basic):
    item = listing_service.create("owner-1", _fields(), basic)

    with pytest.raises(Forbidden):
        listing_service.delete(item.id, "someone-else")

    listing_service.delete(item.id, "owner-1")
    with pytest.raises(NotFound):
        listing_service.get(item.id)
    with pytest.raises(NotFound):
        listing_service.delete(item.id, "owner-1")


def test_search_filters_and_sorts(listing_service, basic, premium, property_repository):
    cheap = listing_service.create("owner-1", _fields(title="Cheap room", price=40), basic)
    house = listing_service.create("owner-2", _fields(title="Family house", location="Porto", price=200, type="house", instant=True), premium)
    loft = listing_service.create("owner-2", _fields(title="Loft", price=90), premium)

    for item, rating, reviews in ((cheap, 4.0, 50), (house, 5.0, 2), (loft, 4.5, 10)):
        item.rating, item.reviews = rating, reviews
        property_repository.save(item)

    ids = lambda items: [item.id for item in items]  # noqa: E731

    assert ids(listing_service.search()) == [cheap.id, loft.id, house.id]
    assert ids(listing_service.search(sort="price-asc")) == [cheap.id, loft.id, house.id]
    assert ids(listing_service.search(sort="price-desc")) == [house.id, loft.id, cheap.id]
    assert ids(listing_service.search(sort="rating-desc")) == [house.id, loft.id, cheap.id]
    assert ids(listing_service.search(kind="house")) == [house.id]
    assert ids(listing_service.search(kind="instant")) == [house.id]
    assert set(ids(listing_service.search(kind="luxury"))) == {house.id, loft.id}
    assert ids(listing_service.search(query="porto")) == [house.id]
    assert ids(listing_service.search(query="LOFT")) == [loft.id]


def test_search_rejects_unknown_sort(listing_service):
    with pytest.raises(ValidationError):
        listing_service.search(sort="random")
