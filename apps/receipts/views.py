from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.permissions import IsAdminRole

from .serializers import ReceiptNumberRequestSerializer
from .services import next_receipt_number


class NextReceiptNumberView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def post(self, request):
        serializer = ReceiptNumberRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        module = serializer.validated_data["module"]
        return Response(
            {"module": module, "receipt_number": next_receipt_number(module)},
            status=status.HTTP_201_CREATED,
        )
