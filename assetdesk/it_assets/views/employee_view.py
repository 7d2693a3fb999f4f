from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework import serializers, status
from rest_framework.views import APIView
from rest_framework.response import Response

from it_assets.models import Employee
from it_assets.permissions import IsAdminRole
from it_assets.serializers.employee_serializer import (
    EmployeeReadSerializer,
    EmployeeWriteSerializer,
    EmployeeFilterSerializer,
    EmployeeImportSerializer,
    ImportResultSerializer,
)
from it_assets.serializers.access_serializer import PingResultSerializer
from it_assets.services.employee_service import create_employee, update_employee, delete_employee
from it_assets.services import export_service, import_service, network_service
from it_assets.selectors.employee_selector import (
    EmployeeFilter,
    get_employee_by_id,
    filter_employees,
    filter_options,
    employee_stats,
)
from it_assets.utils.pagination import DefaultPagination
from .utils import (
    extend_schema, extend_schema_view, OpenApiResponse, inline_serializer,
    path_int, q_int, q_str, q_date, std_errors, client_ip,
)

FILTER_PARAMS = [
    q_str("location", "Lọc theo location ('all' = không lọc)"),
    q_str("department", "Lọc theo department"),
    q_str("section", "Lọc theo section"),
    q_date("date_from", "created_at >= (YYYY-MM-DD)"),
    q_date("date_to", "created_at <= (YYYY-MM-DD)"),
    q_str("q", "Tìm theo name/username/email/IP/computer name/extension"),
]


def _parse_filter(request) -> EmployeeFilter:
    ser = EmployeeFilterSerializer(data=request.query_params)
    ser.is_valid(raise_exception=True)
    return EmployeeFilter(**ser.validated_data)


def _validation_detail(ex: DjangoValidationError):
    return ex.message_dict if hasattr(ex, "error_dict") else ex.messages


# ==============================================================
# /api/employees/  -> GET list (filter + paginate) + POST create
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Employee"],
        summary="List employees (filter + paginate)",
        parameters=FILTER_PARAMS + [q_int("page", "Trang"), q_int("page_size", "Kích thước trang (max 200)")],
        responses=OpenApiResponse(EmployeeReadSerializer(many=True)),
    ),
    post=extend_schema(
        tags=["Employee"],
        summary="Create employee",
        request=EmployeeWriteSerializer,
        responses={201: OpenApiResponse(EmployeeReadSerializer), **std_errors()},
    ),
)
class EmployeeListCreateView(APIView):
    """
    GET: danh sách đã lọc, kèm các giá trị location/department/section cho dropdown.
    POST: tạo mới; created_by = người gọi; có audit INSERT.
    """

    def get(self, request):
        f = _parse_filter(request)
        qs = filter_employees(f)
        paginator = DefaultPagination()
        page = paginator.paginate_queryset(qs, request, view=self)
        data = EmployeeReadSerializer(page, many=True).data
        response = paginator.get_paginated_response(data)
        response.data["filters"] = filter_options(f)
        return response

    def post(self, request):
        serializer = EmployeeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            employee = create_employee(serializer.validated_data, user=request.user, ip=client_ip(request))
        except DjangoValidationError as e:
            return Response({"detail": _validation_detail(e)}, status=status.HTTP_400_BAD_REQUEST)
        except IntegrityError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(EmployeeReadSerializer(employee).data, status=status.HTTP_201_CREATED)


# ==============================================================
# /api/employees/<pk>/  -> GET detail + PUT/PATCH update + DELETE
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Employee"],
        summary="Get employee details",
        parameters=[path_int("pk", "Employee ID")],
        responses={200: OpenApiResponse(EmployeeReadSerializer), **std_errors()},
    ),
    put=extend_schema(
        tags=["Employee"],
        summary="Update employee (owner or admin)",
        parameters=[path_int("pk", "Employee ID")],
        request=EmployeeWriteSerializer,
        responses={200: OpenApiResponse(EmployeeReadSerializer), **std_errors()},
    ),
    patch=extend_schema(
        tags=["Employee"],
        summary="Partially update employee (owner or admin)",
        parameters=[path_int("pk", "Employee ID")],
        request=EmployeeWriteSerializer,
        responses={200: OpenApiResponse(EmployeeReadSerializer), **std_errors()},
    ),
    delete=extend_schema(
        tags=["Employee"],
        summary="Delete employee (admin)",
        parameters=[path_int("pk", "Employee ID")],
        responses={204: OpenApiResponse(None, description="Deleted"), **std_errors()},
    ),
)
class EmployeeDetailView(APIView):

    def get(self, request, pk: int):
        employee = get_employee_by_id(pk)
        if not employee:
            return Response({"detail": "Employee not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(EmployeeReadSerializer(employee).data)

    def _update(self, request, pk: int, partial: bool):
        employee = get_employee_by_id(pk)
        if not employee:
            return Response({"detail": "Employee not found"}, status=status.HTTP_404_NOT_FOUND)

        serializer = EmployeeWriteSerializer(instance=employee, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            updated = update_employee(employee, serializer.validated_data, user=request.user, ip=client_ip(request))
        except Employee.DoesNotExist:
            return Response({"detail": "Employee not found"}, status=status.HTTP_404_NOT_FOUND)
        except PermissionError as e:
            return Response({"detail": str(e)}, status=status.HTTP_403_FORBIDDEN)
        except DjangoValidationError as e:
            return Response({"detail": _validation_detail(e)}, status=status.HTTP_400_BAD_REQUEST)
        except IntegrityError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(EmployeeReadSerializer(updated).data)

    def put(self, request, pk: int):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk: int):
        return self._update(request, pk, partial=True)

    def delete(self, request, pk: int):
        employee = get_employee_by_id(pk)
        if not employee:
            return Response({"detail": "Employee not found"}, status=status.HTTP_404_NOT_FOUND)
        try:
            delete_employee(employee, user=request.user, ip=client_ip(request))
        except Employee.DoesNotExist:
            return Response({"detail": "Employee not found"}, status=status.HTTP_404_NOT_FOUND)
        except PermissionError as e:
            return Response({"detail": str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ==============================================================
# /api/employees/export/?format=csv|xlsx
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Employee"],
        summary="Export filtered employees as CSV or Excel",
        parameters=FILTER_PARAMS + [q_str("format", "csv (mặc định) | xlsx")],
        responses={200: OpenApiResponse(description="File download"), **std_errors()},
    )
)
class EmployeeExportView(APIView):
    # ?format=... cần URL_FORMAT_OVERRIDE=None trong REST_FRAMEWORK
    def get(self, request):
        f = _parse_filter(request)
        qs = filter_employees(f)
        fmt = (request.query_params.get("format") or "csv").lower()
        if fmt == "csv":
            return export_service.export_csv(qs.iterator(chunk_size=1000))
        if fmt in ("xlsx", "excel"):
            return export_service.export_xlsx(qs.iterator(chunk_size=1000))
        return Response({"detail": "format must be csv or xlsx"}, status=status.HTTP_400_BAD_REQUEST)


# ==============================================================
# /api/employees/import/  (admin)
# ==============================================================
@extend_schema_view(
    post=extend_schema(
        tags=["Employee"],
        summary="Bulk import employees from .xlsx / .csv (admin)",
        request={"multipart/form-data": EmployeeImportSerializer},
        responses={200: OpenApiResponse(ImportResultSerializer), **std_errors()},
    )
)
class EmployeeImportView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request):
        ser = EmployeeImportSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        upload = ser.validated_data["file"]
        try:
            result = import_service.import_employees(upload, upload.name, user=request.user, ip=client_ip(request))
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ImportResultSerializer(result).data)


# ==============================================================
# /api/employees/stats/
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Employee"],
        summary="Dashboard stats: total, departments, recent (7 days), top locations",
        responses=inline_serializer(
            name="EmployeeStats",
            fields={
                "total": serializers.IntegerField(),
                "departments": serializers.IntegerField(),
                "recent": serializers.IntegerField(),
                "locations": serializers.ListField(child=serializers.DictField()),
            },
        ),
    )
)
class EmployeeStatsView(APIView):
    def get(self, request):
        return Response(employee_stats())


# ==============================================================
# /api/employees/<pk>/ping/  (admin)
# ==============================================================
@extend_schema_view(
    get=extend_schema(
        tags=["Network"],
        summary="Check reachability of the employee's IP address (admin)",
        parameters=[path_int("pk", "Employee ID")],
        responses={200: OpenApiResponse(PingResultSerializer), **std_errors()},
    )
)
class EmployeePingView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, pk: int):
        employee = get_employee_by_id(pk)
        if not employee:
            return Response({"detail": "Employee not found"}, status=status.HTTP_404_NOT_FOUND)
        if not employee.ip_address:
            return Response({"detail": "Employee has no IP address"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            result = network_service.check_host(employee.ip_address)
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(PingResultSerializer(result.as_dict()).data)
