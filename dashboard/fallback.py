"""Built-in dataset shown whenever the spending API cannot be reached."""

from utils.records import SpendingRecord

DEFAULT_SPENDING_DATA: tuple[SpendingRecord, ...] = (
    SpendingRecord("Defense", 2022, 750),
    SpendingRecord("Education", 2022, 150),
    SpendingRecord("Healthcare", 2022, 200),
    SpendingRecord("Defense", 2023, 780),
    SpendingRecord("Education", 2023, 160),
    SpendingRecord("Healthcare", 2023, 210),
    SpendingRecord("Transportation", 2022, 100),
    SpendingRecord("Transportation", 2023, 110),
)
