import pytest

from pawfam.services.normalizer import (
    display_rating,
    normalize_list,
    normalize_pet,
    normalize_product,
    normalize_profile,
    shelter_name,
)


@pytest.mark.parametrize("raw", [
    [{"id": 1}],
    {"data": [{"id": 1}]},
    {"applications": [{"id": 1}]},
    {"success": True, "whatever": [{"id": 1}]},
])
def test_list_shapes(raw):
    assert normalize_list(raw) == [{"id": 1}]


def test_known_key_wins_over_other_lists():
    raw = {"meta": ["x"], "orders": [{"id": 1}]}
    assert normalize_list(raw) == [{"id": 1}]


def test_custom_known_keys():
    raw = {"pets": [{"id": 1}], "data": [{"id": 2}]}
    assert normalize_list(raw, known_array_keys=("pets",)) == [{"id": 1}]


@pytest.mark.parametrize("raw", [None, "oops", 42, {"message": "none here"}])
def test_unrecognised_shapes_give_empty_list(raw):
    assert normalize_list(raw) == []


def test_product_uses_alternate_field_names():
    product = normalize_product({
        "_id": "abc",
        "title": "Chew Toy",
        "cost": "149.5",
        "details": "Squeaky",
        "images": ["https://img/1.png", "https://img/2.png"],
    })

    assert product.id == "abc"
    assert product.name == "Chew Toy"
    assert product.price == 149.5
    assert product.description == "Squeaky"
    assert product.image == "https://img/1.png"
    assert product.category == "accessories"


def test_product_defaults():
    product = normalize_product({})

    assert product.name == "Untitled Product"
    assert product.price == 0
    assert product.image.startswith("https://placehold.co/")
    assert "Untitled%20Product" in product.image
    assert product.id


def test_product_without_id_keeps_a_stable_identity():
    assert normalize_product({"name": "Collar"}).id == normalize_product({"name": "Collar"}).id


@pytest.mark.parametrize("rating,expected", [(0, 4.5), (None, 4.5), (-1, 4.5), (3.8, 3.8)])
def test_display_rating(rating, expected):
    assert display_rating(rating) == expected


@pytest.mark.parametrize("value,expected", [
    (None, "Vendor"),
    ("Happy Tails", "Happy Tails"),
    ({"name": "Paws Shelter"}, "Paws Shelter"),
    ({"location": "Pune"}, "Pune"),
    ({"vendorName": "Ravi"}, "Ravi"),
    ({}, "Vendor"),
])
def test_shelter_name(value, expected):
    assert shelter_name(value) == expected


def test_pet_defaults_and_vendor_shelter():
    pet = normalize_pet({"_id": "p9", "vendor": {"name": "Paws Shelter"}})

    assert pet.id == "p9"
    assert pet.name == "Unnamed Pet"
    assert pet.type == "Pet"
    assert pet.status == "Available"
    assert pet.shelter == "Paws Shelter"


def test_pet_alternate_fields():
    pet = normalize_pet({
        "id": 7,
        "name": "Milo",
        "animalType": "Cat",
        "breedName": "Indie",
        "ageInfo": "2 years",
        "image": "https://img/milo.png",
    })

    assert pet.id == "7"
    assert pet.type == "Cat"
    assert pet.breed == "Indie"
    assert pet.age == "2 years"
    assert pet.image == "https://img/milo.png"


def test_profile_unwrapping():
    assert normalize_profile({"profile": {"name": "Asha"}}) == {"name": "Asha"}
    assert normalize_profile({"name": "Asha"}) == {"name": "Asha"}
    assert normalize_profile(None) == {}
