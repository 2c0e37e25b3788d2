from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.permissions import IsAuthenticated

from apps.common.permissions import IsAdminOrReadOnly

from .filters import MemberFilter
from .models import Member
from .serializers import MemberSerializer


class MemberViewSet(viewsets.ModelViewSet):
    queryset = Member.objects.all()
    serializer_class = MemberSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = MemberFilter
    search_fields = ["full_name", "email", "national_id"]
    ordering_fields = ["full_name", "join_date", "id"]
    ordering = ["full_name", "id"]
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
