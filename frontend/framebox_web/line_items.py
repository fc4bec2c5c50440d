"""
Line items of the appointment being edited.

The list lives in the Flask session between form round-trips. Each add,
remove or service change posts the form and re-renders it.
"""
from decimal import Decimal, InvalidOperation


def _price(value) -> Decimal:
    try:
        return Decimal(str(value)) if value not in (None, '') else Decimal("0")
    except (InvalidOperation, ValueError):
        return Decimal("0")


def _quantity(value) -> int:
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return quantity if quantity >= 1 else 1


def _service_card(service: dict) -> dict:
    """Display fields cached on a line item"""
    return {
        'id': str(service.get('id')),
        'name': service.get('name'),
        'base_price': str(service.get('base_price') or '0'),
        'duration_hours': service.get('duration_hours'),
    }


class LineItemDraft:
    FIELDS = ('service_id', 'quantity', 'price')

    def __init__(self, items=None):
        self.items = list(items or [])

    def __len__(self):
        return len(self.items)

    def add_line_item(self):
        """Append an empty line: no service, quantity 1, price 0"""
        self.items.append({
            'service_id': None,
            'quantity': 1,
            'price': Decimal("0"),
            'service': None,
        })

    def remove_line_item(self, index: int):
        del self.items[index]

    def update_line_item(self, index: int, field: str, value, services: dict = None):
        """
        Set one field of a line. Choosing a service also copies its base price
        and caches its display fields; the price stays editable afterwards.
        """
        if field not in self.FIELDS:
            raise KeyError(field)

        item = self.items[index]
        if field == 'service_id':
            item['service_id'] = str(value) if value else None
            service = (services or {}).get(item['service_id'])
            if service:
                item['price'] = _price(service.get('base_price'))
                item['service'] = _service_card(service)
        elif field == 'quantity':
            item['quantity'] = _quantity(value)
        else:
            item['price'] = _price(value)

    def total_value(self) -> Decimal:
        return sum((item['price'] * item['quantity'] for item in self.items), Decimal("0"))

    # ----- form round-trips -----

    def apply_form(self, service_ids, quantities, prices, services: dict):
        """
        Merge the posted rows into the draft. The form renders every line, so
        the posted rows decide how many lines there are: missing lines are
        rebuilt from the form and lines it did not post are dropped.
        """
        known = len(self.items)
        del self.items[len(service_ids):]
        while len(self.items) < len(service_ids):
            self.add_line_item()

        for index, item in enumerate(self.items):
            rebuilt = index >= known
            service_changed = False
            submitted = service_ids[index] or None
            if submitted != item['service_id']:
                self.update_line_item(index, 'service_id', submitted, services)
                service_changed = not rebuilt
            if index < len(quantities):
                self.update_line_item(index, 'quantity', quantities[index])
            # after a service change the posted price is the stale one
            if not service_changed and index < len(prices):
                self.update_line_item(index, 'price', prices[index])

    def to_payload(self) -> list:
        """Lines for the backend; rows without a service are left out"""
        return [
            {
                'service_id': item['service_id'],
                'quantity': item['quantity'],
                'price': str(item['price']),
            }
            for item in self.items if item['service_id']
        ]

    def to_session(self) -> list:
        return [dict(item, price=str(item['price'])) for item in self.items]

    @classmethod
    def from_session(cls, data) -> 'LineItemDraft':
        items = []
        for item in data or []:
            items.append({
                'service_id': item.get('service_id') or None,
                'quantity': _quantity(item.get('quantity')),
                'price': _price(item.get('price')),
                'service': item.get('service'),
            })
        return cls(items)

    @classmethod
    def from_appointment(cls, appointment: dict) -> 'LineItemDraft':
        """Load the stored line items of an appointment fetched from the API"""
        items = []
        for line in appointment.get('services') or []:
            service = line.get('service')
            items.append({
                'service_id': str(line['service_id']) if line.get('service_id') else None,
                'quantity': _quantity(line.get('quantity')),
                'price': _price(line.get('price')),
                'service': _service_card(service) if service else None,
            })
        return cls(items)
