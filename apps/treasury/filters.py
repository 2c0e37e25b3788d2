import django_filters

from .fiscal import FiscalYearWindow
from .models import DuesEntry
from .store import window_filter


class DuesEntryFilter(django_filters.FilterSet):
    member = django_filters.NumberFilter(field_name="member_id")
    payment_type = django_filters.ChoiceFilter(choices=DuesEntry.PaymentType.choices)
    paid_from = django_filters.DateFilter(field_name="paid_at", lookup_expr="gte")
    paid_to = django_filters.DateFilter(field_name="paid_at", lookup_expr="lte")
    fiscal_year = django_filters.NumberFilter(method="filter_fiscal_year")

    class Meta:
        model = DuesEntry
        fields = ["member", "month", "year", "payment_type", "group_id"]

    def filter_fiscal_year(self, queryset, name, value):
        if value is None:
            return queryset
        return queryset.filter(window_filter(FiscalYearWindow.starting(int(value))))
