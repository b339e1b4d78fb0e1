from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from ..serializers import CheckoutSerializer, OrderSerializer
from ..services.checkout_service import CheckoutService
from ..services.notification_service import ExpoPushNotifier


class CheckoutView(generics.CreateAPIView):
    serializer_class = CheckoutSerializer
    permission_classes = [IsAuthenticated]

    def get_checkout_service(self):
        return CheckoutService(notifier=ExpoPushNotifier())

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = self.get_checkout_service().create_order(request.user, serializer.validated_data)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class CheckoutSummaryView(generics.GenericAPIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(CheckoutService().get_checkout_summary(request.user))
