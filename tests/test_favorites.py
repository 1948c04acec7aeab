"""Tests for favorite toggling and read-side annotation."""
import pytest

from pantrychef.database import Favorite
from pantrychef.errors import RecipeNotFound
from pantrychef.favorites import FavoriteReconciler
from pantrychef.normalizer import from_storage_record, to_storage_record
from pantrychef.repository_postgres import PostgresRecipeRepository
from pantrychef.validation import validate_recipes


@pytest.fixture
def repo(db):
    return PostgresRecipeRepository(db)


@pytest.fixture
def reconciler(repo):
    return FavoriteReconciler(repo)


@pytest.fixture
def stored_recipe(repo, user, recipe_payload):
    recipe = validate_recipes([recipe_payload()])[0]
    return repo.create_recipe(to_storage_record(recipe), created_by=user.user_id)


def _favorite_count(db, user_id, recipe_id):
    return db.query(Favorite).filter(Favorite.user_id == user_id, Favorite.recipe_id == recipe_id).count()


def test_toggle_twice_restores_original_state(db, reconciler, stored_recipe, user):
    first = reconciler.toggle_favorite(stored_recipe.recipe_id, user.user_id)
    assert first.is_favorite is True
    assert _favorite_count(db, user.user_id, stored_recipe.recipe_id) == 1

    second = reconciler.toggle_favorite(stored_recipe.recipe_id, user.user_id)
    assert second.is_favorite is (not first.is_favorite)
    assert _favorite_count(db, user.user_id, stored_recipe.recipe_id) == 0


def test_repeated_toggles_alternate(reconciler, stored_recipe, user):
    states = [reconciler.toggle_favorite(stored_recipe.recipe_id, user.user_id).is_favorite for _ in range(4)]
    assert states == [True, False, True, False]


def test_toggle_unknown_recipe_is_not_found(db, reconciler, user):
    with pytest.raises(RecipeNotFound):
        reconciler.toggle_favorite("missing", user.user_id)
    assert db.query(Favorite).count() == 0


def test_favorites_are_per_user(reconciler, stored_recipe, user, make_user):
    bob = make_user("bob")
    reconciler.toggle_favorite(stored_recipe.recipe_id, bob.user_id)

    recipe = from_storage_record(stored_recipe)
    assert reconciler.annotate(recipe, bob.user_id).is_favorite is True
    assert reconciler.annotate(recipe, user.user_id).is_favorite is False


def test_annotate_without_user_is_false(reconciler, stored_recipe, user):
    reconciler.toggle_favorite(stored_recipe.recipe_id, user.user_id)
    recipe = reconciler.annotate(from_storage_record(stored_recipe), None)
    assert recipe.is_favorite is False


def test_list_favorites_marks_every_recipe(repo, reconciler, user, recipe_payload):
    recipes = validate_recipes([recipe_payload("One"), recipe_payload("Two"), recipe_payload("Three")])
    rows = [repo.create_recipe(to_storage_record(r), created_by=user.user_id) for r in recipes]
    reconciler.toggle_favorite(rows[0].recipe_id, user.user_id)
    reconciler.toggle_favorite(rows[2].recipe_id, user.user_id)

    favorites = reconciler.list_favorites(user.user_id)
    assert sorted(r.title for r in favorites) == ["One", "Three"]
    assert all(r.is_favorite for r in favorites)


def test_lost_insert_race_still_reports_favorited(db, repo, reconciler, stored_recipe, user):
    assert repo.add_favorite(user.user_id, stored_recipe.recipe_id) is True
    assert repo.add_favorite(user.user_id, stored_recipe.recipe_id) is False
    assert _favorite_count(db, user.user_id, stored_recipe.recipe_id) == 1


def test_deleting_a_recipe_removes_its_favorites(db, repo, reconciler, stored_recipe, user, make_user):
    bob = make_user("bob")
    reconciler.toggle_favorite(stored_recipe.recipe_id, user.user_id)
    reconciler.toggle_favorite(stored_recipe.recipe_id, bob.user_id)

    assert repo.delete(stored_recipe.recipe_id, user.user_id) is True
    assert db.query(Favorite).count() == 0
    assert reconciler.list_favorites(bob.user_id) == []
