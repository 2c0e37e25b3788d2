from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.permissions import IsAdminOrReadOnly

from .models import OrganizationSettings
from .serializers import OrganizationSettingsSerializer


class OrganizationSettingsView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request):
        serializer = OrganizationSettingsSerializer(OrganizationSettings.load())
        return Response(serializer.data)

    def patch(self, request):
        instance = OrganizationSettings.load()
        serializer = OrganizationSettingsSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
