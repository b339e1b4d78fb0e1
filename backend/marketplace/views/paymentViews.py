from rest_framework import generics
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from ..serializers import RefundRequestSerializer
from ..services.refund_service import RefundService


class OrderRefundView(generics.GenericAPIView):
    serializer_class = RefundRequestSerializer
    permission_classes = [IsAuthenticated]

    def post(self, request, order_id):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_role = 'admin' if request.user.is_admin else request.user.user_type
        refund = RefundService().refund_order(
            order_id,
            amount=serializer.validated_data.get('amount'),
            actor_id=request.user.pk,
            actor_role=actor_role
        )
        return Response(refund)
