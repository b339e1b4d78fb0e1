from rest_framework.permissions import BasePermission


class IsRestaurantOwner(BasePermission):
    """
    Restaurant users (and admins) acting on a restaurant they own.
    The restaurant comes from the `restaurant_id` URL kwarg.
    """

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False

        if request.user.is_admin:
            return True

        if request.user.user_type != 'restaurant':
            return False

        restaurant_id = view.kwargs.get('restaurant_id')
        if restaurant_id is None:
            return True

        return request.user.restaurants.filter(restaurant_id=restaurant_id).exists()


class IsCustomerOwner(BasePermission):
    """Object-level check that an order or cart belongs to the caller."""

    def has_object_permission(self, request, view, obj):
        if hasattr(obj, 'customer'):
            return obj.customer == request.user

        if hasattr(obj, 'user'):
            return obj.user == request.user

        return False
