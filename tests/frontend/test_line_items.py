from decimal import Decimal

import pytest

from framebox_web.line_items import LineItemDraft

SERVICES = {
    'svc-1': {'id': 'svc-1', 'name': 'Ensaio Individual', 'base_price': '350.00', 'duration_hours': 2},
    'svc-2': {'id': 'svc-2', 'name': 'Ensaio Casal', 'base_price': '450.00', 'duration_hours': 3},
}


def test_new_line_is_blank():
    draft = LineItemDraft()
    draft.add_line_item()

    assert draft.items == [{'service_id': None, 'quantity': 1, 'price': Decimal('0'), 'service': None}]
    assert draft.total_value() == 0


def test_choosing_service_copies_base_price():
    draft = LineItemDraft()
    draft.add_line_item()

    draft.update_line_item(0, 'service_id', 'svc-1', SERVICES)

    assert draft.items[0]['price'] == Decimal('350.00')
    assert draft.items[0]['service']['name'] == 'Ensaio Individual'


def test_price_stays_editable_after_choosing_service():
    draft = LineItemDraft()
    draft.add_line_item()
    draft.update_line_item(0, 'service_id', 'svc-1', SERVICES)

    draft.update_line_item(0, 'price', '300.00')
    draft.update_line_item(0, 'quantity', '2')

    assert draft.total_value() == Decimal('600.00')


def test_invalid_numbers_fall_back():
    draft = LineItemDraft()
    draft.add_line_item()

    draft.update_line_item(0, 'quantity', 'abc')
    draft.update_line_item(0, 'price', 'x')

    assert draft.items[0]['quantity'] == 1
    assert draft.items[0]['price'] == Decimal('0')


def test_unknown_field_is_an_error():
    draft = LineItemDraft()
    draft.add_line_item()

    with pytest.raises(KeyError):
        draft.update_line_item(0, 'discount', '10')


def test_remove_line_item():
    draft = LineItemDraft()
    draft.add_line_item()
    draft.add_line_item()
    draft.update_line_item(1, 'service_id', 'svc-2', SERVICES)

    draft.remove_line_item(0)

    assert len(draft) == 1
    assert draft.items[0]['service_id'] == 'svc-2'


def test_payload_skips_lines_without_service():
    draft = LineItemDraft()
    draft.add_line_item()
    draft.add_line_item()
    draft.update_line_item(1, 'service_id', 'svc-1', SERVICES)

    assert draft.to_payload() == [{'service_id': 'svc-1', 'quantity': 1, 'price': '350.00'}]


def test_apply_form_ignores_stale_price_on_service_change():
    draft = LineItemDraft()
    draft.add_line_item()
    draft.update_line_item(0, 'service_id', 'svc-1', SERVICES)

    draft.apply_form(['svc-2'], ['1'], ['350.00'], SERVICES)

    assert draft.items[0]['price'] == Decimal('450.00')


def test_apply_form_keeps_edited_price():
    draft = LineItemDraft()
    draft.add_line_item()
    draft.update_line_item(0, 'service_id', 'svc-1', SERVICES)

    draft.apply_form(['svc-1'], ['3'], ['320.00'], SERVICES)

    assert draft.total_value() == Decimal('960.00')


def test_session_round_trip():
    draft = LineItemDraft()
    draft.add_line_item()
    draft.update_line_item(0, 'service_id', 'svc-1', SERVICES)

    restored = LineItemDraft.from_session(draft.to_session())

    assert restored.items == draft.items


def test_from_appointment():
    draft = LineItemDraft.from_appointment({
        'services': [
            {'service_id': 'svc-2', 'quantity': 2, 'price': '400.00',
             'service': {'id': 'svc-2', 'name': 'Ensaio Casal', 'base_price': '450.00'}},
        ]
    })

    assert draft.total_value() == Decimal('800.00')
    assert draft.items[0]['service']['name'] == 'Ensaio Casal'


def test_apply_form_rebuilds_missing_lines_from_posted_rows():
    draft = LineItemDraft()

    draft.apply_form(['svc-1', 'svc-2'], ['1', '2'], ['320.00', '450.00'], SERVICES)

    assert draft.to_payload() == [
        {'service_id': 'svc-1', 'quantity': 1, 'price': '320.00'},
        {'service_id': 'svc-2', 'quantity': 2, 'price': '450.00'},
    ]
    assert draft.items[1]['service']['name'] == 'Ensaio Casal'


def test_apply_form_drops_lines_the_form_did_not_post():
    draft = LineItemDraft()
    draft.add_line_item()
    draft.add_line_item()

    draft.apply_form(['svc-1'], ['1'], ['350.00'], SERVICES)

    assert len(draft) == 1


STEPS = [
    ('add', None),
    ('update', (0, 'service_id', 'svc-1')),
    ('add', None),
    ('update', (1, 'service_id', 'svc-2')),
    ('update', (1, 'quantity', '3')),
    ('update', (0, 'price', '299.90')),
    ('add', None),
    ('update', (2, 'quantity', '4')),
    ('remove', 0),
    ('update', (1, 'service_id', 'svc-1')),
    ('update', (0, 'quantity', 'x')),
    ('remove', 1),
    ('remove', 0),
]


def test_total_matches_lines_after_every_step():
    draft = LineItemDraft()

    for action, argument in STEPS:
        if action == 'add':
            draft.add_line_item()
        elif action == 'remove':
            draft.remove_line_item(argument)
        else:
            index, field, value = argument
            draft.update_line_item(index, field, value, SERVICES)

        expected = sum((item['price'] * item['quantity'] for item in draft.items), Decimal('0'))
        assert draft.total_value() == expected
        assert all(item['quantity'] >= 1 for item in draft.items)

    assert draft.total_value() == 0
