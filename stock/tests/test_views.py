"""
Stock — API Integration Tests

@file stock/tests/test_views.py
"""

import uuid
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from stock.models import LedgerEntry, StockBalance
from tests.factories import FinishedGoodFactory, RawMaterialFactory, stock_up


def _adjust_body(product, delta, unit='bags', **extra):
    body = {
        'balance_id': str(product.stock_balance.pk),
        'product_id': str(product.pk),
        'delta': str(delta),
        'unit': unit,
        'note': 'Cycle count correction',
    }
    body.update(extra)
    return body


@pytest.mark.django_db
class TestAdjustEndpoint:
    def _post(self, client, body):
        return client.post(reverse('api-v1:stock:adjust'), body, format='json')

    def test_supervisor_adjusts(self, supervisor_client, supervisor):
        product = RawMaterialFactory()
        response = self._post(supervisor_client, _adjust_body(product, '12.5'))
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body['success'] is True
        entry = LedgerEntry.objects.get(pk=body['ledger_id'])
        assert entry.created_by == supervisor
        assert StockBalance.objects.get(product=product).quantity == Decimal('12.5')

    def test_admin_adjusts(self, admin_client):
        product = RawMaterialFactory()
        response = self._post(admin_client, _adjust_body(product, 3))
        assert response.status_code == status.HTTP_201_CREATED

    def test_operator_forbidden(self, authenticated_client):
        product = RawMaterialFactory()
        response = self._post(authenticated_client, _adjust_body(product, 3))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not LedgerEntry.objects.exists()

    def test_unauthenticated(self, api_client):
        product = RawMaterialFactory()
        response = self._post(api_client, _adjust_body(product, 3))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_role_in_body_is_ignored(self, authenticated_client):
        product = RawMaterialFactory()
        response = self._post(authenticated_client, _adjust_body(product, 3, role='ADMIN'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_insufficient_stock(self, supervisor_client):
        product = RawMaterialFactory()
        stock_up(product, 15)
        response = self._post(supervisor_client, _adjust_body(product, -20))
        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body['success'] is False
        assert body['code'] == 'INSUFFICIENT_STOCK'
        assert body['retryable'] is False
        assert StockBalance.objects.get(product=product).quantity == Decimal('15')

    def test_zero_delta(self, supervisor_client):
        product = RawMaterialFactory()
        response = self._post(supervisor_client, _adjust_body(product, 0))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['code'] == 'VALIDATION_ERROR'

    def test_unit_mismatch(self, supervisor_client):
        product = FinishedGoodFactory()
        response = self._post(supervisor_client, _adjust_body(product, 5, unit='bags'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['code'] == 'VALIDATION_ERROR'

    def test_unknown_unit(self, supervisor_client):
        product = RawMaterialFactory()
        response = self._post(supervisor_client, _adjust_body(product, 5, unit='kg'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_balance_of_other_product(self, supervisor_client):
        product = RawMaterialFactory()
        other = RawMaterialFactory()
        body = _adjust_body(product, 5, balance_id=str(other.stock_balance.pk))
        response = self._post(supervisor_client, body)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['code'] == 'NOT_FOUND'

    def test_credit_past_column_capacity(self, supervisor_client):
        product = RawMaterialFactory()
        first = self._post(supervisor_client, _adjust_body(product, '99999999999'))
        assert first.status_code == status.HTTP_201_CREATED
        second = self._post(supervisor_client, _adjust_body(product, '99999999999'))
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.json()['code'] == 'VALIDATION_ERROR'
        assert LedgerEntry.objects.filter(product=product).count() == 1
        level = supervisor_client.get(
            reverse('api-v1:stock:level-detail', kwargs={'pk': product.pk}),
        )
        assert level.status_code == status.HTTP_200_OK
        assert Decimal(str(level.json()['data']['quantity'])) == Decimal('99999999999')

    @pytest.mark.parametrize('note', [None, '', '   '])
    def test_note_required(self, supervisor_client, note):
        product = RawMaterialFactory()
        body = _adjust_body(product, 5)
        if note is None:
            del body['note']
        else:
            body['note'] = note
        response = self._post(supervisor_client, body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'note' in response.json()['errors']
        assert not LedgerEntry.objects.filter(product=product).exists()

    def test_missing_product_id(self, supervisor_client):
        response = self._post(supervisor_client, {'delta': '1', 'unit': 'bags'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'product_id' in response.json()['errors']


@pytest.mark.django_db
class TestLevelEndpoints:
    def test_list(self, authenticated_client):
        product = RawMaterialFactory(name='HDPE Resin')
        stock_up(product, 7)
        response = authenticated_client.get(reverse('api-v1:stock:level-list'))
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['meta']['count'] == 1
        assert body['data'][0]['quantity'] == 7
        assert body['data'][0]['unit_of_measure'] == 'bags'

    def test_retrieve(self, authenticated_client):
        product = RawMaterialFactory()
        response = authenticated_client.get(
            reverse('api-v1:stock:level-detail', kwargs={'pk': product.pk}),
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['product_id'] == str(product.pk)

    def test_retrieve_unknown(self, authenticated_client):
        response = authenticated_client.get(
            reverse('api-v1:stock:level-detail', kwargs={'pk': uuid.uuid4()}),
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reorder_alerts(self, authenticated_client):
        low = RawMaterialFactory(reorder_level=Decimal('10'))
        stock_up(low, 2)
        ok = RawMaterialFactory(reorder_level=Decimal('10'))
        stock_up(ok, 20)
        response = authenticated_client.get(reverse('api-v1:stock:level-reorder-alerts'))
        assert response.status_code == status.HTTP_200_OK
        assert [row['product_id'] for row in response.json()['data']] == [str(low.pk)]

    def test_reconcile_admin_only(self, authenticated_client, admin_client):
        product = RawMaterialFactory()
        url = reverse('api-v1:stock:level-reconcile', kwargs={'pk': product.pk})
        assert authenticated_client.get(url).status_code == status.HTTP_403_FORBIDDEN
        response = admin_client.get(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['consistent'] is True


@pytest.mark.django_db
class TestLedgerEndpoints:
    def test_admin_lists_ledger(self, admin_client):
        product = RawMaterialFactory()
        stock_up(product, 4)
        response = admin_client.get(reverse('api-v1:stock:ledger-list'), {'product': str(product.pk)})
        assert response.status_code == status.HTTP_200_OK
        row = response.json()['data'][0]
        assert row['product_id'] == str(product.pk)
        assert row['quantity_change'] == 4
        assert row['source_table'] == 'products_stock'
        assert row['source_transaction_id'] == str(product.stock_balance.pk)

    def test_ledger_pages_by_cursor(self, admin_client):
        product = RawMaterialFactory()
        for quantity in (1, 2, 3):
            stock_up(product, quantity)
        response = admin_client.get(reverse('api-v1:stock:ledger-list'), {'page_size': 2})
        body = response.json()
        assert len(body['data']) == 2
        assert 'cursor=' in body['meta']['next']
        assert body['meta']['previous'] is None

    def test_supervisor_forbidden(self, supervisor_client):
        response = supervisor_client.get(reverse('api-v1:stock:ledger-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_ledger_is_read_only(self, admin_client):
        product = RawMaterialFactory()
        ledger_id = stock_up(product, 4)
        url = reverse('api-v1:stock:ledger-detail', kwargs={'pk': ledger_id})
        assert admin_client.get(url).status_code == status.HTTP_200_OK
        assert admin_client.delete(url).status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert admin_client.patch(url, {'notes': 'x'}, format='json').status_code == (
            status.HTTP_405_METHOD_NOT_ALLOWED
        )
