"""Integration tests for the presale API endpoints"""
import pytest
from httpx import AsyncClient

from presale.models import MONTH

from helpers import (
    OWNER, HOLDER, ALICE, BOB, CAROL, SALE_TOKEN, GENESIS, ONE_TOKEN,
    UPDATED_PRICE, TEN_TOKENS_IN_WEI, CLAIM_START, CLAIM_END, round_params,
)

API = "/api/v1"


def as_owner():
    return {"X-Caller-Address": OWNER}


def as_user(address: str):
    return {"X-Caller-Address": address}


async def create_round(client: AsyncClient, **overrides) -> dict:
    response = await client.post(
        f"{API}/rounds", json=round_params(GENESIS, **overrides), headers=as_owner()
    )
    assert response.status_code == 200
    return response.json()


class TestHealthEndpoint:
    """Tests for health check endpoint"""

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "oracle_mode" in data


class TestCallerHeader:
    """Tests for how caller identity is documented"""

    @pytest.mark.asyncio
    async def test_header_marked_unauthenticated(self, client: AsyncClient):
        response = await client.get("/openapi.json")
        assert response.status_code == 200
        parameters = response.json()["paths"][f"{API}/rounds"]["post"]["parameters"]
        header = next(p for p in parameters if p["name"] == "X-Caller-Address")
        assert header["in"] == "header"
        assert "Not authenticated" in header["description"]


class TestRoundEndpoints:
    """Tests for round configuration endpoints"""

    @pytest.mark.asyncio
    async def test_list_rounds_empty(self, client: AsyncClient):
        response = await client.get(f"{API}/rounds")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_and_get_round(self, client: AsyncClient):
        created = await create_round(client)
        assert created["id"] == 1
        assert created["in_sale"] == 100000
        assert created["base_decimals"] == ONE_TOKEN

        response = await client.get(f"{API}/rounds/1")
        assert response.status_code == 200
        assert response.json()["price"] == created["price"]

    @pytest.mark.asyncio
    async def test_get_round_not_found(self, client: AsyncClient):
        response = await client.get(f"{API}/rounds/999")
        assert response.status_code == 404
        assert response.json() == {"error": "InvalidId", "detail": "Invalid presale id"}

    @pytest.mark.asyncio
    async def test_create_requires_owner(self, client: AsyncClient):
        response = await client.post(
            f"{API}/rounds", json=round_params(GENESIS), headers=as_user(ALICE)
        )
        assert response.status_code == 403
        assert response.json()["error"] == "NotOwner"

    @pytest.mark.asyncio
    async def test_create_requires_caller_header(self, client: AsyncClient):
        response = await client.post(f"{API}/rounds", json=round_params(GENESIS))
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_with_zero_price(self, client: AsyncClient):
        response = await client.post(
            f"{API}/rounds", json=round_params(GENESIS, price=0), headers=as_owner()
        )
        assert response.status_code == 400
        assert response.json()["error"] == "ZeroPrice"

    @pytest.mark.asyncio
    async def test_owner_edits(self, client: AsyncClient):
        await create_round(client)

        response = await client.patch(
            f"{API}/rounds/1/price", json={"price": UPDATED_PRICE}, headers=as_owner()
        )
        assert response.status_code == 200
        assert response.json()["price"] == UPDATED_PRICE

        response = await client.patch(
            f"{API}/rounds/1/times", json={"end_time": GENESIS + 400}, headers=as_owner()
        )
        assert response.status_code == 200
        assert response.json()["end_time"] == GENESIS + 400

        response = await client.patch(
            f"{API}/rounds/1/sale-token", json={"sale_token_address": SALE_TOKEN}, headers=as_owner()
        )
        assert response.json()["sale_token_address"] == SALE_TOKEN

        response = await client.patch(
            f"{API}/rounds/1/buy-options", json={"enable_buy_with_stable": False}, headers=as_owner()
        )
        assert response.json()["enable_buy_with_stable"] is False

        response = await client.post(f"{API}/rounds/1/pause", headers=as_owner())
        assert response.json()["paused"] is True
        response = await client.post(f"{API}/rounds/1/pause", headers=as_owner())
        assert response.status_code == 400
        assert response.json()["error"] == "AlreadyPaused"

    @pytest.mark.asyncio
    async def test_change_times_needs_a_bound(self, client: AsyncClient):
        await create_round(client)
        response = await client.patch(f"{API}/rounds/1/times", json={}, headers=as_owner())
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidParams"


class TestPurchaseEndpoints:
    """Tests for quotes and purchases"""

    @pytest.mark.asyncio
    async def test_oracle_price(self, client: AsyncClient):
        response = await client.get(f"{API}/oracle/price")
        assert response.status_code == 200
        assert response.json() == {"rate": 1880 * ONE_TOKEN, "decimals": 18}

    @pytest.mark.asyncio
    async def test_quotes(self, client: AsyncClient):
        await create_round(client, price=UPDATED_PRICE)

        response = await client.get(f"{API}/rounds/1/quote/stable", params={"amount": 10})
        assert response.status_code == 200
        assert response.json()["cost"] == 500000

        response = await client.get(f"{API}/rounds/1/quote/native", params={"amount": 10})
        assert response.json()["cost"] == TEN_TOKENS_IN_WEI

    @pytest.mark.asyncio
    async def test_quote_unknown_round(self, client: AsyncClient):
        response = await client.get(f"{API}/rounds/3/quote/native", params={"amount": 10})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_buy_before_start(self, client: AsyncClient):
        await create_round(client)
        response = await client.post(
            f"{API}/rounds/1/buy/native",
            json={"token_amount": 10, "paid_amount": ONE_TOKEN},
            headers=as_user(ALICE),
        )
        assert response.status_code == 400
        assert response.json() == {"error": "InvalidTime", "detail": "Invalid time for buying"}

    @pytest.mark.asyncio
    async def test_buy_with_stable(self, client: AsyncClient, clock):
        await create_round(client, price=UPDATED_PRICE)
        await client.post(f"{API}/ledgers/usdt/mint", json={"account": ALICE, "amount": 10**9})
        await client.post(
            f"{API}/ledgers/usdt/approve",
            json={"owner": ALICE, "spender": HOLDER, "amount": 500000},
        )
        clock.set(GENESIS + 60)

        response = await client.post(
            f"{API}/rounds/1/buy/stable", json={"token_amount": 10}, headers=as_user(ALICE)
        )
        assert response.status_code == 200
        assert response.json()["total_amount"] == 10 * ONE_TOKEN

        response = await client.get(f"{API}/ledgers/usdt/balance/{OWNER}")
        assert response.json()["balance"] == 500000

        response = await client.post(
            f"{API}/rounds/1/buy/stable", json={"token_amount": 10}, headers=as_user(ALICE)
        )
        assert response.status_code == 400
        assert response.json()["error"] == "InsufficientAllowance"


class TestFullLifecycle:
    """Create, sell, vest and claim through the API"""

    @pytest.mark.asyncio
    async def test_sale_to_claims(self, client: AsyncClient, clock):
        await create_round(client)
        await client.patch(f"{API}/rounds/1/price", json={"price": UPDATED_PRICE}, headers=as_owner())
        for buyer in (ALICE, BOB):
            await client.post(f"{API}/ledgers/eth/mint", json={"account": buyer, "amount": ONE_TOKEN})
        clock.set(GENESIS + 60)

        response = await client.post(
            f"{API}/rounds/1/buy/native",
            json={"token_amount": 10, "paid_amount": TEN_TOKENS_IN_WEI},
            headers=as_user(ALICE),
        )
        assert response.status_code == 200
        record = response.json()
        assert record["total_amount"] == 10 * ONE_TOKEN
        assert record["claim_start"] == CLAIM_START
        assert record["claim_end"] == CLAIM_END

        response = await client.post(
            f"{API}/rounds/1/buy/native",
            json={"token_amount": 4, "paid_amount": ONE_TOKEN},
            headers=as_user(BOB),
        )
        assert response.status_code == 200

        response = await client.get(f"{API}/ledgers/eth/balance/{BOB}")
        assert response.json()["balance"] == ONE_TOKEN - 4 * TEN_TOKENS_IN_WEI // 10

        # Half is vested but no sale token is configured yet
        clock.set(CLAIM_START + MONTH + 1)
        response = await client.post(f"{API}/rounds/1/claim", json={"user_address": ALICE})
        assert response.json()["error"] == "SaleTokenUnset"

        await client.patch(
            f"{API}/rounds/1/sale-token", json={"sale_token_address": SALE_TOKEN}, headers=as_owner()
        )
        await client.post(
            f"{API}/ledgers/{SALE_TOKEN}/mint", json={"account": HOLDER, "amount": 14 * ONE_TOKEN}
        )

        response = await client.get(f"{API}/rounds/1/claimable/{ALICE}")
        assert response.json()["claimable_amount"] == 5 * ONE_TOKEN

        response = await client.post(f"{API}/rounds/1/claim", json={"user_address": ALICE})
        assert response.status_code == 200
        assert response.json()["amount"] == 5 * ONE_TOKEN

        # A batch containing a user with no purchase changes nothing
        clock.set(CLAIM_END)
        response = await client.post(
            f"{API}/rounds/1/claim-multiple", json={"user_addresses": [ALICE, CAROL]}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "NothingToClaim"

        response = await client.post(
            f"{API}/rounds/1/claim-multiple", json={"user_addresses": [ALICE, BOB]}
        )
        assert response.status_code == 200
        data = response.json()
        assert [c["amount"] for c in data["claims"]] == [5 * ONE_TOKEN, 4 * ONE_TOKEN]
        assert data["total_amount"] == 9 * ONE_TOKEN

        response = await client.get(f"{API}/rounds/1/vesting/{ALICE}")
        assert response.json()["claimed_amount"] == 10 * ONE_TOKEN

        response = await client.get(f"{API}/ledgers/{SALE_TOKEN}/balance/{HOLDER}")
        assert response.json()["balance"] == 0

        response = await client.post(f"{API}/rounds/1/claim", json={"user_address": ALICE})
        assert response.json()["error"] == "AlreadyClaimed"

    @pytest.mark.asyncio
    async def test_vesting_record_not_found(self, client: AsyncClient):
        await create_round(client)
        response = await client.get(f"{API}/rounds/1/vesting/{ALICE}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_batch(self, client: AsyncClient):
        await create_round(client)
        response = await client.post(f"{API}/rounds/1/claim-multiple", json={"user_addresses": []})
        assert response.status_code == 400
        assert response.json()["error"] == "EmptyUserList"


class TestEventEndpoints:
    """Tests for the event log"""

    @pytest.mark.asyncio
    async def test_events_in_write_order(self, client: AsyncClient):
        await create_round(client)
        await client.patch(f"{API}/rounds/1/price", json={"price": UPDATED_PRICE}, headers=as_owner())
        await client.post(f"{API}/rounds/1/pause", headers=as_owner())

        response = await client.get(f"{API}/events", params={"round_id": 1})
        assert response.status_code == 200
        events = response.json()
        assert [e["event_type"] for e in events] == ["round_created", "round_updated", "round_paused"]
        assert events[1]["key"] == "PRICE"

    @pytest.mark.asyncio
    async def test_filter_by_type(self, client: AsyncClient):
        await create_round(client)
        await client.patch(f"{API}/rounds/1/price", json={"price": UPDATED_PRICE}, headers=as_owner())

        response = await client.get(f"{API}/events", params={"event_type": "round_updated"})
        assert len(response.json()) == 1
