from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.context import OwnerContext
from .serializers import OccupancySummarySerializer
from .services import OccupancyService
from api.permissions import IsOwner


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsOwner])
def occupancy_summary(request):
    """
    Occupancy recomputed from active students.

    Query params: hostel (optional hostel id)
    """
    ctx = OwnerContext.from_request(request)
    hostel_id = request.query_params.get('hostel') or None
    summary = OccupancyService().summary(ctx, hostel_id=hostel_id)
    return Response(OccupancySummarySerializer(summary).data)
