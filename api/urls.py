"""
API URLs for StayTrack
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from accounts.views import AccountViewSet, preferences
from hostels.views import HostelViewSet
from rooms.views import RoomViewSet
from students.views import StudentViewSet
from payments.views import PaymentViewSet
from expenses.views import ExpenseViewSet
from mess.views import MessMenuViewSet
from occupancy.views import occupancy_summary

# Create router
router = DefaultRouter()
router.register(r'accounts', AccountViewSet, basename='account')
router.register(r'hostels', HostelViewSet, basename='hostel')
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'students', StudentViewSet, basename='student')
router.register(r'payments', PaymentViewSet, basename='payment')
router.register(r'expenses', ExpenseViewSet, basename='expense')
router.register(r'mess-menu', MessMenuViewSet, basename='mess-menu')

urlpatterns = [
    # JWT Authentication
    path('auth/', include('accounts.urls')),

    path('occupancy/summary/', occupancy_summary, name='occupancy-summary'),
    path('preferences/', preferences, name='preferences'),

    # API routes
    path('', include(router.urls)),
]
