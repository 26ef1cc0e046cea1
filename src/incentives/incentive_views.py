"""API views for the incentives module."""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import filters, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.pagination import MonthlyRecordPagination
from api.v1.permissions import IsStaffOrReadOnly
from incentives.exports import export_monthly_record_to_excel
from incentives.importers import SalesImportError, import_sales_records
from incentives.incentive_serializers import (
    BatchRowSerializer,
    BatchSummarySerializer,
    CalculateRequestSerializer,
    IncentiveDetailSerializer,
    MonthlyRecordSerializer,
    PositionThresholdSerializer,
    SaveMonthlyRecordSerializer,
    StatisticsReportSerializer,
)
from incentives.models import MonthlyRecord, PositionThreshold
from incentives.services import (
    RecordExistsError,
    calculate_batch,
    compute_store_statistics,
    get_monthly_details,
    reset_thresholds_to_defaults,
    save_monthly_record,
    summarize_batch,
)

logger = logging.getLogger(__name__)


def _batch_payload(rows):
    return {
        "rows": BatchRowSerializer(rows, many=True).data,
        "summary": BatchSummarySerializer(summarize_batch(rows)).data,
    }


# ────────────────────────────────────────────────────────────
# Thresholds
# ────────────────────────────────────────────────────────────

class PositionThresholdViewSet(viewsets.ModelViewSet):
    """Per-position net-sales breakpoints. Writes are staff-only."""

    serializer_class = PositionThresholdSerializer
    queryset = PositionThreshold.objects.all()
    permission_classes = [permissions.IsAuthenticated, IsStaffOrReadOnly]
    pagination_class = None

    @action(detail=False, methods=["post"])
    def reset(self, request):
        thresholds = reset_thresholds_to_defaults()
        return Response(self.get_serializer(thresholds, many=True).data)


# ────────────────────────────────────────────────────────────
# Calculation (preview, nothing persisted)
# ────────────────────────────────────────────────────────────

class IncentiveUploadView(APIView):
    """Parse an uploaded sales workbook and return the calculated preview."""

    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        upload = request.FILES.get("file")
        if upload is None:
            raise ValidationError({"file": "엑셀 파일을 첨부해주세요."})
        if not upload.name.lower().endswith(".xlsx"):
            raise ValidationError({"file": ".xlsx 파일만 업로드할 수 있습니다."})
        if upload.size > settings.INCENTIVE_UPLOAD_MAX_BYTES:
            raise ValidationError({"file": "파일 크기가 너무 큽니다."})

        try:
            imported = import_sales_records(upload)
        except SalesImportError as exc:
            raise ValidationError({"file": str(exc)})

        rows = calculate_batch(imported.records)
        logger.info(
            "Incentive upload by %s: %d row(s), %d error(s).",
            request.user, len(rows), imported.errors,
        )
        payload = _batch_payload(rows)
        payload.update({
            "errors": imported.errors,
            "error_details": imported.error_details,
            "missing_headers": imported.missing_headers,
        })
        return Response(payload)


class IncentiveCalculateView(APIView):
    """Recalculate an edited preview."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = CalculateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rows = calculate_batch(serializer.to_records())
        return Response(_batch_payload(rows))


# ────────────────────────────────────────────────────────────
# Monthly history
# ────────────────────────────────────────────────────────────

class MonthlyRecordViewSet(viewsets.ModelViewSet):
    """Saved months. Creating a record calculates and stores its rows."""

    serializer_class = MonthlyRecordSerializer
    queryset = MonthlyRecord.objects.all().order_by("-year", "-month")
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = MonthlyRecordPagination
    filter_backends = [filters.OrderingFilter]
    ordering_fields = ["year", "month", "total_incentive"]
    http_method_names = ["get", "post", "delete", "head", "options"]

    def create(self, request, *args, **kwargs):
        serializer = SaveMonthlyRecordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            record = save_monthly_record(
                data["year"],
                data["month"],
                serializer.to_records(),
                overwrite=data["overwrite"],
            )
        except RecordExistsError as exc:
            return Response(
                {"detail": str(exc), "year": exc.year, "month": exc.month},
                status=status.HTTP_409_CONFLICT,
            )
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)})
        return Response(MonthlyRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def details(self, request, pk=None):
        record = self.get_object()
        return Response(IncentiveDetailSerializer(get_monthly_details(record), many=True).data)

    @action(detail=True, methods=["get"])
    def statistics(self, request, pk=None):
        record = self.get_object()
        return Response(StatisticsReportSerializer(compute_store_statistics(record)).data)

    @action(detail=True, methods=["get"])
    def export(self, request, pk=None):
        return export_monthly_record_to_excel(self.get_object())


class StatisticsView(APIView):
    """Labor-share statistics for ``?year=&month=``."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        try:
            year = int(request.query_params.get("year", ""))
            month = int(request.query_params.get("month", ""))
        except ValueError:
            raise ValidationError({"detail": "year와 month를 지정해주세요."})

        record = MonthlyRecord.objects.filter(year=year, month=month).first()
        if record is None:
            raise NotFound(f"{year}년 {month}월 기록이 없습니다.")
        return Response(StatisticsReportSerializer(compute_store_statistics(record)).data)
