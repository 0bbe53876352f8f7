"""Tests for the calculator API routes."""

import httpx
import pytest

from gamecalc.config import REPO_ROOT
from gamecalc.main import app
from gamecalc.repositories.json_cache import JsonCache
from gamecalc.repositories.pokemon_repository import GoRepository, PokemonRepository
from gamecalc.repositories.wow_repository import WowRepository
from gamecalc.services.catch_service import CatchService, GoCatchService
from gamecalc.services.upgrade_service import UpgradeService

pytestmark = pytest.mark.anyio

KNOWLEDGE_DIR = REPO_ROOT / "knowledge"
SERVICE_ATTRS = ["catch_service", "go_catch_service", "upgrade_service"]


@pytest.fixture
async def client():
    """Async test client with services reading the repo's knowledge directory."""
    cache = JsonCache()
    app.state.catch_service = CatchService(PokemonRepository(knowledge_dir=KNOWLEDGE_DIR, cache=cache))
    app.state.go_catch_service = GoCatchService(GoRepository(knowledge_dir=KNOWLEDGE_DIR, cache=cache))
    app.state.upgrade_service = UpgradeService(
        WowRepository(knowledge_dir=KNOWLEDGE_DIR, cache=cache), threshold=0.5
    )

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    for attr in SERVICE_ATTRS:
        if hasattr(app.state, attr):
            delattr(app.state, attr)


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_root(client):
    response = await client.get("/")
    assert response.json()["docs"] == "/docs"


async def test_services_created_lazily():
    """Routes build their own services when none are on app.state."""
    for attr in SERVICE_ATTRS:
        if hasattr(app.state, attr):
            delattr(app.state, attr)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/pokemon/catch", json={"capture_rate": 45})

    assert response.status_code == 200
    assert isinstance(app.state.catch_service, CatchService)
    for attr in SERVICE_ATTRS:
        if hasattr(app.state, attr):
            delattr(app.state, attr)


class TestPokemonRoutes:
    """Tests for /api/pokemon."""

    async def test_list_games(self, client):
        response = await client.get("/api/pokemon/games")

        assert response.status_code == 200
        games = response.json()["games"]
        assert games[0]["game_key"] == "redblue"
        assert games[0]["ruleset_key"] == "gen1"

    async def test_list_species(self, client):
        response = await client.get("/api/pokemon/games/redblue/species")

        assert response.status_code == 200
        species = response.json()["species"]
        ids = [s["id"] for s in species]
        assert ids == sorted(ids)
        assert 249 not in ids

    async def test_list_species_unknown_game(self, client):
        response = await client.get("/api/pokemon/games/nope/species")
        assert response.status_code == 404

    async def test_catch_by_species(self, client):
        response = await client.post(
            "/api/pokemon/catch",
            json={"game_key": "redblue", "species": "bulbasaur", "throws": 10},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["probability"] == pytest.approx(0.0588, abs=5e-4)
        assert data["a_value"] == pytest.approx(15.0)
        assert data["ruleset_key"] == "gen1"
        assert data["species"]["slug"] == "bulbasaur"
        assert data["expected_throws"] == pytest.approx(1 / data["probability"])
        assert data["cumulative_probability"] == pytest.approx(1 - (1 - data["probability"]) ** 10)

    async def test_catch_with_conditions(self, client):
        response = await client.post(
            "/api/pokemon/catch",
            json={"capture_rate": 45, "ball": "net", "conditions": {"target_is_water_or_bug": True}},
        )
        assert response.json()["ball_multiplier"] == 3.5

    async def test_master_ball_reports_null_multiplier(self, client):
        response = await client.post(
            "/api/pokemon/catch",
            json={"game_key": "redblue", "species": "mewtwo", "ball": "Master Ball"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["probability"] == 1.0
        assert data["guaranteed"] is True
        assert data["ball_multiplier"] is None

    async def test_impossible_catch_reports_null_expected_throws(self, client):
        response = await client.post("/api/pokemon/catch", json={"capture_rate": 0})

        data = response.json()
        assert data["probability"] == 0.0
        assert data["expected_throws"] is None

    async def test_catch_out_of_range_input_is_clamped(self, client):
        response = await client.post(
            "/api/pokemon/catch",
            json={"capture_rate": 9000, "hp_fraction": -2, "turn": -5},
        )
        assert response.status_code == 200
        assert response.json()["probability"] == 1.0

    async def test_catch_unknown_species(self, client):
        response = await client.post(
            "/api/pokemon/catch", json={"game_key": "redblue", "species": "sprigatito"}
        )
        assert response.status_code == 404
        assert "sprigatito" in response.json()["detail"]

    async def test_catch_unknown_game(self, client):
        response = await client.post(
            "/api/pokemon/catch", json={"game_key": "johto", "species": "bulbasaur"}
        )
        assert response.status_code == 404

    async def test_catch_invalid_body(self, client):
        response = await client.post("/api/pokemon/catch", json={"hp_fraction": "lots"})
        assert response.status_code == 422


class TestPokemonGoRoutes:
    """Tests for /api/pokemon-go."""

    async def test_catch(self, client):
        response = await client.post(
            "/api/pokemon-go/catch",
            json={"species": "PIKACHU", "level": 20, "throws": 3},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["species"]["form"] == "PIKACHU_NORMAL"
        assert data["cpm"] == 0.5974
        assert data["per_throw"] == pytest.approx(0.2 / (2 * 0.5974))
        assert data["throws"] == 3

    async def test_catch_with_bonuses(self, client):
        response = await client.post(
            "/api/pokemon-go/catch",
            json={
                "species": "larvitar",
                "level": 30,
                "ball": "ultra",
                "berry": "golden razz",
                "throw": "excellent",
                "curveball": True,
                "medals": ["gold", "platinum"],
            },
        )

        data = response.json()
        assert data["multiplier"] == pytest.approx(2.0 * 2.5 * 1.7 * 1.7 * 1.35)
        assert 0.0 < data["per_throw"] <= 1.0

    async def test_catch_unknown_species(self, client):
        response = await client.post("/api/pokemon-go/catch", json={"species": "MISSINGNO"})
        assert response.status_code == 404


class TestWowRoutes:
    """Tests for /api/wow."""

    async def test_list_specs(self, client):
        response = await client.get("/api/wow/specs")

        assert response.status_code == 200
        data = response.json()
        assert data["weights_version"] == "1"
        assert len(data["specs"]) == 26
        assert data["specs"][0] == {"key": "dk_frost", "group": "Death Knight", "label": "Frost"}

    async def test_search_items(self, client):
        response = await client.get("/api/wow/items", params={"q": "of"})

        assert response.status_code == 200
        names = [item["name"] for item in response.json()["items"]]
        assert names == ["Signet of Priory", "Bulwark of the Black Ox"]

    async def test_search_items_requires_query(self, client):
        response = await client.get("/api/wow/items")
        assert response.status_code == 422

    async def test_upgrade_check_with_stats(self, client):
        response = await client.post(
            "/api/wow/upgrade-check",
            json={
                "spec": "fire_mage",
                "current_stats": {"CRIT_RATING": 100},
                "candidate_stats": {"CRIT_RATING": 200},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["aggregate_score"] == pytest.approx(55.0)
        assert data["verdict"] == "upgrade"
        assert data["current_item"] is None

    async def test_upgrade_check_with_items(self, client):
        response = await client.post(
            "/api/wow/upgrade-check",
            json={"spec": "fire_mage", "current_item_id": 219308, "candidate_item_id": 221136},
        )

        assert response.status_code == 200
        data = response.json()
        # 588 * 0.6 + 429 * 0.45 - 612 * 0.55 - 405 * 0.5
        assert data["aggregate_score"] == pytest.approx(6.75)
        assert data["verdict"] == "upgrade"
        assert data["candidate_item"]["name"] == "Devout Zealot's Ring"
        # Stamina carries no weight for a dps spec and nets to zero
        stamina = [row for row in data["rows"] if row["key"] == "STAMINA"]
        assert stamina[0]["weighted_delta"] == 0

    async def test_upgrade_check_unknown_item(self, client):
        response = await client.post(
            "/api/wow/upgrade-check",
            json={"spec": "fire_mage", "current_item_id": 1, "candidate_item_id": 221136},
        )
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "ids",
        [{"current_item_id": 999999}, {"candidate_item_id": 221136}],
    )
    async def test_upgrade_check_rejects_half_item_pair(self, client, ids):
        response = await client.post(
            "/api/wow/upgrade-check", json={"spec": "fury_warrior", **ids}
        )
        assert response.status_code == 422
        assert "given together" in response.text

    async def test_upgrade_check_unknown_spec(self, client):
        response = await client.post(
            "/api/wow/upgrade-check",
            json={"spec": "mystery", "candidate_stats": {"CRIT_RATING": 200}},
        )
        assert response.json()["verdict"] == "insufficient-data"

    async def test_upgrade_check_rejects_unknown_focus(self, client):
        response = await client.post(
            "/api/wow/upgrade-check", json={"spec": "fire_mage", "focus": "pvp"}
        )
        assert response.status_code == 422

    async def test_stat_priority(self, client):
        response = await client.post(
            "/api/wow/stat-priority",
            json={"spec": "mage_fire", "ratings": {"crit": 1000, "haste": 500, "vers": 250}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["best_stat"] == "crit"
        assert data["priority_line"] == "CRIT > HASTE > VERS > MASTERY"
