from rest_framework.views import APIView
from rest_framework.response import Response

from it_assets.permissions import IsAdminRole
from it_assets.selectors.employee_selector import location_counts
from it_assets.selectors.user_selector import get_directory_user
from it_assets.serializers.access_serializer import (
    MeSerializer,
    PingRequestSerializer,
    PingResultSerializer,
    LocationCountSerializer,
)
from it_assets.services import network_service
from .utils import extend_schema, extend_schema_view, OpenApiResponse, q_str, std_errors


# ==============================================================
# /api/me/
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Access"],
        summary="Current user with admin flag",
        responses={200: OpenApiResponse(MeSerializer), **std_errors()},
    )
)
class MeView(APIView):
    def get(self, request):
        d = get_directory_user(request.user)
        return Response(MeSerializer({
            "id": d.id,
            "username": request.user.get_username(),
            "email": d.email,
            "full_name": d.full_name,
            "is_admin": d.is_admin,
        }).data)


# ==============================================================
# /api/locations/?q=  (admin)
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Access"],
        summary="All locations with employee count (admin)",
        parameters=[q_str("q", "Lọc theo tên location")],
        responses={200: OpenApiResponse(LocationCountSerializer(many=True)), **std_errors()},
    )
)
class LocationListView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        items = location_counts(request.query_params.get("q") or None)
        return Response(LocationCountSerializer(items, many=True).data)


# ==============================================================
# /api/network/ping/  (admin)
# ==============================================================
@extend_schema_view(
    post=extend_schema(
        tags=["Network"],
        summary="Check whether a host answers on http/https (admin)",
        request=PingRequestSerializer,
        responses={200: OpenApiResponse(PingResultSerializer), **std_errors()},
    )
)
class NetworkPingView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request):
        ser = PingRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = network_service.check_host(ser.validated_data["ip_address"])
        return Response(PingResultSerializer(result.as_dict()).data)
