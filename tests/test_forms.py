"""Tests for the add-transaction and add-goal workflows."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.audit import AuditEventType
from finance_tracker.forms import GoalForm, TransactionForm
from finance_tracker.models import SplitMismatchError, TransactionType
from finance_tracker.services import FinanceDataService, InMemoryFinanceStore


TODAY = date(2026, 10, 19)


@pytest.fixture
def form():
    return TransactionForm(today=TODAY)


class TestDefaultSplitPolicy:
    """Tests for how the form keeps splits in line with type and total."""

    def test_initial_state(self, form):
        assert form.type == TransactionType.EXPENSE
        assert form.date == TODAY
        assert len(form.splits) == 1
        assert form.splits[0].category_id == "cat_exp_1"
        assert form.splits[0].amount == 0

    def test_single_split_follows_total(self, form):
        form.set_total_amount("120.50")
        assert form.splits[0].amount == Decimal("120.50")
        assert form.remaining == 0
        assert form.is_balanced is True

    def test_unparsable_total_counts_as_zero(self, form):
        form.set_total_amount("abc")
        assert form.total_amount == 0
        assert form.splits[0].amount == 0

    def test_type_change_resets_splits(self, form):
        form.set_total_amount("80")
        form.add_split()
        form.set_split_amount(1, "30")

        form.set_type(TransactionType.INCOME)

        assert len(form.splits) == 1
        assert form.splits[0].category_id == "cat_inc_1"
        assert form.splits[0].amount == Decimal("80")
        assert [c.id for c in form.available_categories][:2] == ["cat_inc_1", "cat_inc_2"]

    def test_edited_split_no_longer_follows_total(self, form):
        form.set_total_amount("100")
        form.set_split_amount(0, "70")
        form.set_total_amount("150")
        assert form.splits[0].amount == Decimal("70")
        assert form.remaining == Decimal("80")

    def test_type_change_restores_sync(self, form):
        form.set_split_amount(0, "5")
        form.set_type(TransactionType.EXPENSE)
        form.set_total_amount("40")
        assert form.splits[0].amount == Decimal("40")

    def test_add_and_remove_splits(self, form):
        form.set_total_amount("100")
        form.add_split()
        assert form.splits[1].category_id == "cat_exp_1"
        assert form.splits[1].amount == 0

        form.set_split_category(1, "cat_exp_3")
        form.set_split_amount(0, "60")
        form.set_split_amount(1, "40")
        assert form.remaining == 0

        form.remove_split(1)
        assert len(form.splits) == 1
        form.remove_split(0)
        assert len(form.splits) == 1

    def test_build_reports_mismatch(self, form):
        form.description = "Shop"
        form.set_total_amount("100")
        form.set_split_amount(0, "90.50")
        with pytest.raises(SplitMismatchError):
            form.build()


class TestTransactionSubmit:
    """Tests for TransactionForm.submit()."""

    @pytest.mark.asyncio
    async def test_successful_submit(self, form):
        service = FinanceDataService(InMemoryFinanceStore())
        await service.load()
        form.description = "Groceries"
        form.set_total_amount("42")
        form.set_split_category(0, "cat_exp_3")

        created = await form.submit(service)

        assert created is not None
        assert form.error == ""
        assert form.is_submitting is False
        assert service.transactions[0].id == created.id
        assert service.transactions[0].splits[0].category_id == "cat_exp_3"

    @pytest.mark.asyncio
    async def test_invalid_input_never_reaches_store(self, form, audit_logs):
        store = InMemoryFinanceStore()
        service = FinanceDataService(store)
        form.set_total_amount("10")

        created = await form.submit(service)

        assert created is None
        assert form.error == "Description is required."
        assert store.fetch_count == 0
        entry = audit_logs[-1]
        assert entry["event_type"] == AuditEventType.VALIDATION_FAILED.value
        assert entry["details"] == {"field": "description"}

    @pytest.mark.asyncio
    async def test_store_error_keeps_form_open(self, form):
        store = InMemoryFinanceStore()
        service = FinanceDataService(store)
        await service.load()
        store.set_failure("Failed to add transaction.")
        form.description = "Bus"
        form.set_total_amount("3")

        created = await form.submit(service)

        assert created is None
        assert form.error == "Failed to add transaction."
        assert form.description == "Bus"
        assert service.transactions == ()

    @pytest.mark.asyncio
    async def test_long_description_is_submitted(self, form):
        service = FinanceDataService(InMemoryFinanceStore())
        await service.load()
        form.description = "d" * 501
        form.set_total_amount("10")

        created = await form.submit(service)

        assert created is not None
        assert form.error == ""
        assert service.transactions[0].description == "d" * 501

    def test_reset(self, form):
        form.description = "x"
        form.set_total_amount("9")
        form.error = "boom"
        form.reset(TODAY)
        assert form.description == ""
        assert form.total_amount == 0
        assert form.error == ""


class TestGoalForm:
    """Tests for GoalForm."""

    @pytest.mark.asyncio
    async def test_submit_goal(self):
        service = FinanceDataService(InMemoryFinanceStore())
        await service.load()
        form = GoalForm(today=TODAY)
        form.name = "Emergency Fund"
        form.target_amount = 5000
        form.target_date = date(2027, 1, 1)

        goal = await form.submit(service)

        assert goal is not None
        assert service.goals[0].name == "Emergency Fund"
        assert service.goals[0].progress == 0.0

    @pytest.mark.asyncio
    async def test_past_date_rejected(self):
        service = FinanceDataService(InMemoryFinanceStore())
        form = GoalForm(today=TODAY)
        form.name = "Late"
        form.target_amount = 100
        form.target_date = date(2026, 10, 18)

        assert await form.submit(service) is None
        assert form.error == "Target date cannot be in the past."
        assert service.goals == ()

    @pytest.mark.asyncio
    async def test_long_name_is_submitted(self):
        service = FinanceDataService(InMemoryFinanceStore())
        await service.load()
        form = GoalForm(today=TODAY)
        form.name = "n" * 201
        form.target_amount = 100
        form.target_date = date(2027, 1, 1)

        goal = await form.submit(service)

        assert goal is not None
        assert form.error == ""
        assert service.goals[0].name == "n" * 201
