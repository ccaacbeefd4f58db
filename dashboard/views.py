"""
Dashboard API

- OWNER: occupancy, room and fee collection figures for the current month
- STUDENT: minimal home with today's mess menu
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.context import OwnerContext
from .services import DashboardService


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_home(request):
    """
    Role-aware home screen data.

    Returns:
        Owner stats for owners, the student dashboard for students
    """
    ctx = OwnerContext.from_request(request)
    service = DashboardService()
    if ctx.is_owner:
        return Response({'role': 'OWNER', **service.owner_home(ctx)})
    return Response({'role': 'STUDENT', **service.student_home(ctx)})
