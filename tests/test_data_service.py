"""
Tests for FinanceDataService

Flows run against InMemoryFinanceStore so the write -> reload contract
can be observed without a network.
"""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.audit import AuditEventType
from finance_tracker.models import (
    Goal,
    Split,
    Transaction,
    TransactionType,
    build_goal,
    build_transaction,
)
from finance_tracker.services import (
    FinanceDataService,
    InMemoryFinanceStore,
    TransportError,
)


RELOAD_FAILED = "Failed to fetch data from the server."


class ReloadFailsAfterWriteStore(InMemoryFinanceStore):
    """Accepts the write, then fails the reload that follows it."""

    async def create_transaction(self, draft):
        created = await super().create_transaction(draft)
        self.set_failure(RELOAD_FAILED)
        return created

    async def create_goal(self, draft):
        created = await super().create_goal(draft)
        self.set_failure(RELOAD_FAILED)
        return created


def seeded_store(store_class=InMemoryFinanceStore, goals=()) -> InMemoryFinanceStore:
    return store_class(
        transactions=[
            Transaction(
                id="seed-1",
                date=date(2024, 1, 15),
                description="Rent and food",
                total_amount=Decimal("100"),
                type=TransactionType.EXPENSE,
                splits=(
                    Split(category_id="cat_exp_1", amount=Decimal("60")),
                    Split(category_id="cat_exp_3", amount=Decimal("40")),
                ),
            ),
            Transaction(
                id="seed-2",
                date=date(2024, 2, 1),
                description="Salary",
                total_amount=Decimal("2000"),
                type=TransactionType.INCOME,
                splits=(Split(category_id="cat_inc_1", amount=Decimal("2000")),),
            ),
        ],
        goals=goals,
    )


def expense_draft(amount="25", day=date(2024, 3, 1)):
    return build_transaction(day, "Cinema", amount, TransactionType.EXPENSE, [("cat_exp_5", amount)])


def holiday_goal(target="1500"):
    return build_goal("Holiday", target, date(2030, 7, 1), today=date(2026, 1, 1))


class TestLoad:
    """Tests for load()."""

    @pytest.mark.asyncio
    async def test_initial_load(self):
        service = FinanceDataService(seeded_store())
        assert service.loading is True

        ok = await service.load()

        assert ok is True
        assert service.loading is False
        assert service.error is None
        assert [t.id for t in service.transactions] == ["seed-1", "seed-2"]
        assert service.goals == ()

    @pytest.mark.asyncio
    async def test_initial_load_failure_leaves_collections_empty(self):
        store = seeded_store()
        store.set_failure(RELOAD_FAILED)
        service = FinanceDataService(store)

        ok = await service.load()

        assert ok is False
        assert service.loading is False
        assert service.error == RELOAD_FAILED
        assert service.transactions == ()
        assert service.goals == ()

    @pytest.mark.asyncio
    async def test_reload_failure_keeps_previous_data(self):
        store = seeded_store()
        service = FinanceDataService(store)
        await service.load()
        before = service.transactions

        store.set_failure("Server unavailable")
        assert await service.load() is False

        assert service.error == "Server unavailable"
        assert service.transactions is before

    @pytest.mark.asyncio
    async def test_successful_reload_clears_error(self):
        store = seeded_store()
        store.set_failure("down")
        service = FinanceDataService(store)
        await service.load()

        store.clear_failure()
        assert await service.load() is True
        assert service.error is None
        assert len(service.transactions) == 2

    @pytest.mark.asyncio
    async def test_load_failure_is_audited(self, audit_logs):
        store = seeded_store()
        store.set_failure("down")
        service = FinanceDataService(store)

        await service.load()

        entry = audit_logs[-1]
        assert entry["event_type"] == AuditEventType.DATA_LOAD_FAILED.value
        assert entry["error_message"] == "down"
        assert entry["details"] == {"initial": True}

    @pytest.mark.asyncio
    async def test_goal_progress_comes_from_store(self):
        store = seeded_store(goals=[
            Goal(
                id="g1",
                name="Car",
                target_amount=Decimal("1000"),
                target_date=date(2030, 1, 1),
                current_amount=Decimal("250"),
            ),
        ])
        service = FinanceDataService(store)

        await service.load()

        assert service.goals[0].progress == 0.25
        assert service.goals[0].remaining_amount == Decimal("750")


class TestAddTransaction:
    """Tests for add_transaction()."""

    @pytest.mark.asyncio
    async def test_new_transaction_visible_after_return(self):
        store = seeded_store()
        service = FinanceDataService(store)
        await service.load()
        fetches = store.fetch_count

        created = await service.add_transaction(expense_draft())

        assert created.id.startswith("txn_")
        assert store.fetch_count == fetches + 1
        assert created.id in [t.id for t in service.transactions]
        assert service.summary().totals.expenses == Decimal("125")

    @pytest.mark.asyncio
    async def test_collections_are_replaced_not_mutated(self):
        service = FinanceDataService(seeded_store())
        await service.load()
        snapshot = service.transactions

        await service.add_transaction(expense_draft())

        assert len(snapshot) == 2
        assert len(service.transactions) == 3
        assert service.transactions is not snapshot

    @pytest.mark.asyncio
    async def test_write_failure_is_reraised_and_state_untouched(self, audit_logs):
        store = seeded_store()
        service = FinanceDataService(store)
        await service.load()
        snapshot = service.transactions
        fetches = store.fetch_count

        store.set_failure("Failed to add transaction.")
        with pytest.raises(TransportError, match="Failed to add transaction."):
            await service.add_transaction(expense_draft())

        assert service.transactions is snapshot
        assert store.fetch_count == fetches
        assert service.error is None
        assert audit_logs[-1]["event_type"] == AuditEventType.TRANSACTION_CREATE_FAILED.value

    @pytest.mark.asyncio
    async def test_reload_failure_after_write_returns_created(self):
        store = seeded_store(ReloadFailsAfterWriteStore)
        service = FinanceDataService(store)
        await service.load()
        snapshot = service.transactions

        created = await service.add_transaction(expense_draft())

        assert created.id.startswith("txn_")
        assert created.description == "Cinema"
        assert service.error == RELOAD_FAILED
        assert service.transactions is snapshot

    @pytest.mark.asyncio
    async def test_write_and_reload_share_correlation_id(self, audit_logs):
        service = FinanceDataService(seeded_store())
        await service.load()

        await service.add_transaction(expense_draft())

        created_entry, loaded_entry = audit_logs[-2:]
        assert created_entry["event_type"] == AuditEventType.TRANSACTION_CREATED.value
        assert loaded_entry["event_type"] == AuditEventType.DATA_LOADED.value
        assert created_entry["correlation_id"] is not None
        assert created_entry["correlation_id"] == loaded_entry["correlation_id"]

    @pytest.mark.asyncio
    async def test_long_description_round_trips(self):
        service = FinanceDataService(seeded_store())
        await service.load()
        description = "Weekly shop " * 60
        draft = build_transaction(
            date(2024, 3, 2), description, "12", TransactionType.EXPENSE, [("cat_exp_3", "12")],
        )

        created = await service.add_transaction(draft)

        assert created.description == description.strip()
        assert service.error is None


class TestAddGoal:
    """Tests for add_goal()."""

    @pytest.mark.asyncio
    async def test_returns_reloaded_goal(self):
        store = seeded_store()
        service = FinanceDataService(store)
        await service.load()

        goal = await service.add_goal(holiday_goal())

        assert goal.name == "Holiday"
        assert goal.current_amount == Decimal("0")
        assert service.goals == (goal,)

    @pytest.mark.asyncio
    async def test_reload_failure_after_write_returns_created(self):
        store = seeded_store(ReloadFailsAfterWriteStore)
        service = FinanceDataService(store)
        await service.load()

        goal = await service.add_goal(holiday_goal())

        assert goal.id.startswith("goal_")
        assert goal.name == "Holiday"
        assert goal.current_amount == Decimal("0")
        assert service.error == RELOAD_FAILED
        assert service.goals == ()
        assert len(service.transactions) == 2

    @pytest.mark.asyncio
    async def test_goal_write_failure(self):
        store = seeded_store()
        service = FinanceDataService(store)
        await service.load()
        store.set_failure("Failed to add goal.")

        with pytest.raises(TransportError):
            await service.add_goal(holiday_goal("1000"))
        assert service.goals == ()


class TestReadHelpers:
    """Tests for category_name() and summary()."""

    @pytest.mark.asyncio
    async def test_summary_matches_reports(self):
        service = FinanceDataService(seeded_store())
        await service.load()

        summary = service.summary()

        assert summary.totals.income == Decimal("2000")
        assert summary.totals.expenses == Decimal("100")
        assert summary.totals.balance == Decimal("1900")
        assert {row.category_id: row.amount for row in summary.expense_breakdown} == {
            "cat_exp_1": Decimal("60"),
            "cat_exp_3": Decimal("40"),
        }
        assert [m.period_label for m in summary.monthly] == ["Jan 24", "Feb 24"]

    def test_category_name(self):
        service = FinanceDataService(InMemoryFinanceStore())
        assert service.category_name("cat_exp_8") == "Goal Contributions"
        assert service.category_name("cat_nope") == "Unknown"

    def test_summary_before_load_is_empty(self):
        summary = FinanceDataService(InMemoryFinanceStore()).summary()
        assert summary.totals.balance == 0
        assert summary.expense_breakdown == []
        assert summary.monthly == []
