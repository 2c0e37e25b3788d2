import django_filters

from .models import Member


class MemberFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Member.Status.choices)
    degree = django_filters.ChoiceFilter(choices=Member.Degree.choices)
    name = django_filters.CharFilter(field_name="full_name", lookup_expr="icontains")

    class Meta:
        model = Member
        fields = ["status", "degree", "lodge_office"]
