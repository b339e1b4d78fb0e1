from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from ..exceptions import Unauthorized
from ..models import User
from ..serializers import CartSerializer, CartItemSerializer, AddToCartSerializer, UpdateCartItemSerializer
from ..services.cart_service import CartService


class CartServiceMixin:
    def get_cart_service(self):
        return CartService()


class CartDetailView(CartServiceMixin, generics.RetrieveAPIView):
    serializer_class = CartSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.get_cart_service().get_or_create_cart(self.request.user)


class CartSummaryView(CartServiceMixin, generics.GenericAPIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = request.user
        user_id = request.query_params.get('userId')

        if user_id and str(user_id) != str(user.pk):
            if not user.is_admin:
                raise Unauthorized("You can only view your own cart")
            user = get_object_or_404(User, pk=user_id)

        return Response(self.get_cart_service().get_cart_summary(user))


class CartItemAddView(CartServiceMixin, generics.CreateAPIView):
    serializer_class = AddToCartSerializer
    permission_classes = [IsAuthenticated]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart_item, created = self.get_cart_service().add_to_cart(request.user, serializer.validated_data)

        return Response(
            CartItemSerializer(cart_item).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )


class CartItemDetailView(CartServiceMixin, generics.GenericAPIView):
    serializer_class = UpdateCartItemSerializer
    permission_classes = [IsAuthenticated]

    def patch(self, request, pk):
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        cart_item = self.get_cart_service().update_cart_item(request.user, pk, serializer.validated_data)
        return Response(CartItemSerializer(cart_item).data)

    def delete(self, request, pk):
        self.get_cart_service().remove_cart_item(request.user, pk)
        return Response({'message': 'Item removed from cart'})


class CartClearView(CartServiceMixin, generics.GenericAPIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request):
        self.get_cart_service().clear_cart(request.user)
        return Response({'message': 'Cart cleared successfully'})
