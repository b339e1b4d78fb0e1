import hashlib
import json
import logging
from decimal import Decimal, ROUND_HALF_UP
from ..models import VariationOption, AddOnOption

logger = logging.getLogger(__name__)

ZERO = Decimal('0')
TWO_PLACES = Decimal('0.01')


def to_money(value):
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def normalize_variations(selected_variations):
    variations = [
        {'variationId': int(v['variationId']), 'selectedOptionId': int(v['selectedOptionId'])}
        for v in selected_variations or []
    ]
    return sorted(variations, key=lambda v: v['variationId'])


def normalize_add_ons(selected_add_ons):
    add_ons = [
        {
            'addOnId': int(a['addOnId']),
            'selectedOptionIds': sorted(int(option_id) for option_id in a.get('selectedOptionIds') or []),
        }
        for a in selected_add_ons or []
    ]
    return sorted(add_ons, key=lambda a: a['addOnId'])


def normalize_selections(selected_variations=None, selected_add_ons=None):
    """
    Canonical text form of a selection set. Two carts rows hold the same
    selection iff these strings are equal.
    """
    variations = json.dumps(normalize_variations(selected_variations), separators=(',', ':'))
    add_ons = json.dumps(normalize_add_ons(selected_add_ons), separators=(',', ':'))
    return f"{variations}|{add_ons}"


def selection_key(selected_variations=None, selected_add_ons=None):
    normalized = normalize_selections(selected_variations, selected_add_ons)
    return hashlib.sha256(normalized.encode('utf-8')).hexdigest()


class CatalogPriceLookup:
    """Batched option price reads against the menu catalog."""

    def get_variation_option_prices(self, ids):
        if not ids:
            return {}
        rows = VariationOption.objects.filter(option_id__in=ids).values_list('option_id', 'price_modifier')
        return dict(rows)

    def get_add_on_option_prices(self, ids):
        if not ids:
            return {}
        rows = AddOnOption.objects.filter(option_id__in=ids).values_list('option_id', 'price')
        return dict(rows)


class PriceTable:
    def __init__(self, variation_prices=None, add_on_prices=None):
        self.variation_prices = variation_prices or {}
        self.add_on_prices = add_on_prices or {}

    def variation_price(self, option_id):
        return Decimal(self.variation_prices.get(option_id, ZERO))

    def add_on_price(self, option_id):
        return Decimal(self.add_on_prices.get(option_id, ZERO))


class CartPricingEngine:
    """
    Prices cart rows from current catalog prices.

    Nothing is cached between calls: every summary re-reads option prices,
    so a catalog change shows up in carts until checkout freezes it.
    """

    def __init__(self, price_lookup):
        self.price_lookup = price_lookup

    def collect_option_ids(self, items):
        variation_ids = set()
        add_on_ids = set()
        for item in items:
            for variation in item.selected_variations or []:
                variation_ids.add(int(variation['selectedOptionId']))
            for add_on in item.selected_add_ons or []:
                add_on_ids.update(int(option_id) for option_id in add_on.get('selectedOptionIds') or [])
        return variation_ids, add_on_ids

    def load_prices(self, items):
        variation_ids, add_on_ids = self.collect_option_ids(items)
        variation_prices = self.price_lookup.get_variation_option_prices(variation_ids) if variation_ids else {}
        add_on_prices = self.price_lookup.get_add_on_option_prices(add_on_ids) if add_on_ids else {}
        return PriceTable(variation_prices, add_on_prices)

    def resolve_unit_price(self, base_price, selected_variations, selected_add_ons, prices):
        # Options deleted after being chosen price at zero
        unit_price = Decimal(base_price)
        for variation in selected_variations or []:
            unit_price += prices.variation_price(int(variation['selectedOptionId']))
        for add_on in selected_add_ons or []:
            for option_id in add_on.get('selectedOptionIds') or []:
                unit_price += prices.add_on_price(int(option_id))
        return unit_price

    def price_item(self, item, prices):
        unit_price = self.resolve_unit_price(
            item.menu_item.price,
            item.selected_variations,
            item.selected_add_ons,
            prices,
        )
        line_total = unit_price * item.quantity
        priced = {
            'id': item.cart_item_id,
            'menuItemId': item.menu_item.item_id,
            'menuItemName': item.menu_item.name,
            'basePrice': to_money(item.menu_item.price),
            'quantity': item.quantity,
            'specialNotes': item.special_notes,
            'selectedVariations': item.selected_variations or [],
            'selectedAddOns': item.selected_add_ons or [],
            'unitPrice': to_money(unit_price),
            'totalPrice': to_money(line_total),
        }
        return priced, line_total

    def summarize(self, cart_id, items):
        items = [item for item in items if item.menu_item is not None and item.restaurant is not None]
        prices = self.load_prices(items)

        groups = {}
        total = ZERO
        for item in items:
            priced, line_total = self.price_item(item, prices)

            group = groups.get(item.restaurant.restaurant_id)
            if group is None:
                group = {
                    'restaurantId': item.restaurant.restaurant_id,
                    'restaurantName': item.restaurant.name,
                    'subtotal': ZERO,
                    'items': [],
                }
                groups[item.restaurant.restaurant_id] = group

            group['subtotal'] += line_total
            group['items'].append(priced)
            total += line_total

        restaurants = list(groups.values())
        for group in restaurants:
            group['subtotal'] = to_money(group['subtotal'])

        return {
            'cartId': cart_id,
            'totalItems': len(items),
            'totalPrice': to_money(total),
            'restaurants': restaurants,
        }
