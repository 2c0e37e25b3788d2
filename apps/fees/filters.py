import django_filters

from .models import DegreeFee, Expense, ExtraordinaryPayment


class ExpenseFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="expense_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="expense_date", lookup_expr="lte")
    category = django_filters.CharFilter(field_name="category", lookup_expr="icontains")
    min_amount = django_filters.NumberFilter(field_name="amount", lookup_expr="gte")
    max_amount = django_filters.NumberFilter(field_name="amount", lookup_expr="lte")

    class Meta:
        model = Expense
        fields = ["expense_date", "category"]


class ExtraordinaryPaymentFilter(django_filters.FilterSet):
    fee = django_filters.NumberFilter(field_name="fee_id")
    member = django_filters.NumberFilter(field_name="member_id")

    class Meta:
        model = ExtraordinaryPayment
        fields = ["fee", "member", "payment_date"]


class DegreeFeeFilter(django_filters.FilterSet):
    member = django_filters.NumberFilter(field_name="member_id")
    date_from = django_filters.DateFilter(field_name="fee_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="fee_date", lookup_expr="lte")

    class Meta:
        model = DegreeFee
        fields = ["member", "fee_date"]
