"""Prometheus metrics for expenses, installments and statements"""

from prometheus_client import Counter, Histogram

from caderninho.domain.models import MonthlyStatement

# Expense metrics
expenses_created_counter = Counter(
    "caderninho_expenses_created_total",
    "Expenses created",
    ["payment_method"],
)

installments_generated_counter = Counter(
    "caderninho_installments_generated_total",
    "Credit card installments generated",
)

installments_paid_counter = Counter(
    "caderninho_installments_paid_total",
    "Installments marked as paid",
)

# Statement metrics
statement_build_histogram = Histogram(
    "caderninho_statement_build_seconds",
    "Time to build a monthly statement",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

over_limit_counter = Counter(
    "caderninho_over_limit_categories_total",
    "Categories found over their limit when building statements",
    ["category"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_expense(payment_method: str, installment_count: int) -> None:
    """Record a created expense and the installments generated for it"""
    expenses_created_counter.labels(payment_method=payment_method).inc()
    if installment_count:
        installments_generated_counter.inc(installment_count)


def record_statement(statement: MonthlyStatement) -> None:
    """Count categories over their limit in a built statement"""
    for summary in statement.categories:
        if summary.is_over_limit:
            over_limit_counter.labels(category=summary.category.value).inc()
