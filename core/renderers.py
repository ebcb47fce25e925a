"""
Core — Response Renderer

Every successful response leaves the API as

  { "success": true, "data": ..., "meta": ... }

Page-number pages report count/next/previous in meta; ledger cursor pages
only next/previous. Views that already answer with an explicit envelope
(stock adjustment returns ledger_id, run creation production_run_id) and
error bodies from core.exceptions pass through untouched.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer

PAGE_META_KEYS = ('count', 'next', 'previous')


def wrap(data):
    """Build the success envelope for one response body."""
    if isinstance(data, dict) and 'success' in data:
        return data
    if isinstance(data, dict) and 'results' in data:
        meta = {key: data[key] for key in PAGE_META_KEYS if key in data}
        return {'success': True, 'data': data['results'], 'meta': meta}
    if isinstance(data, list):
        return {'success': True, 'data': data, 'meta': {'count': len(data)}}
    return {'success': True, 'data': data}


class StandardJSONRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')
        if response is None or response.status_code < 400:
            data = wrap(data)
        return super().render(data, accepted_media_type, renderer_context)
