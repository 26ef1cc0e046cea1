"""Page sizes for the v1 list endpoints."""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 25
    page_size_query_param = "page_size"
    max_page_size = 200


class RosterPagination(StandardResultsSetPagination):
    """Roster screens show a whole workshop at once."""

    page_size = 100
    max_page_size = 500


class MonthlyRecordPagination(StandardResultsSetPagination):
    """One page per calendar year of saved months."""

    page_size = 12
    max_page_size = 120
