"""
HTTP views over the session directory.
"""

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .apps import get_directory


@require_GET
def stats(request):
    """Current counts of connected, waiting and paired strangers."""
    return JsonResponse(get_directory().stats().as_dict())
