"""Main API URL router for /api/v1/."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from api.v1 import hrm_views
from api.v1 import views as v1_views
from incentives import incentive_views as incentive_api_views

router = DefaultRouter()
router.register(r'stores', v1_views.StoreViewSet, basename='store')
router.register(r'employees', hrm_views.EmployeeViewSet, basename='employee')
router.register(r'salary-components', hrm_views.SalaryComponentViewSet, basename='salary-component')
router.register(r'thresholds', incentive_api_views.PositionThresholdViewSet, basename='threshold')
router.register(r'monthly-records', incentive_api_views.MonthlyRecordViewSet, basename='monthly-record')


app_name = 'api'
urlpatterns = [
    path('', include(router.urls)),

    # Incentive calculation
    path('incentives/upload/', incentive_api_views.IncentiveUploadView.as_view(), name='incentive-upload'),
    path('incentives/calculate/', incentive_api_views.IncentiveCalculateView.as_view(), name='incentive-calculate'),

    # Statistics
    path('statistics/', incentive_api_views.StatisticsView.as_view(), name='statistics'),
]
