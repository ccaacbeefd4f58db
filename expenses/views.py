from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.context import OwnerContext
from core.dto import ExpenseDTO
from .serializers import ExpenseSerializer, ExpenseWriteSerializer
from .services import ExpenseService
from api.permissions import IsOwner


class ExpenseViewSet(viewsets.ViewSet):
    """ViewSet for monthly expenses"""
    permission_classes = [IsAuthenticated, IsOwner]
    lookup_value_regex = r'\d+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = ExpenseService()

    def list(self, request):
        """Expenses of ?month (default current) with the month total"""
        ctx = OwnerContext.from_request(request)
        expenses = self.service.list_month(ctx, request.query_params.get('month'))
        return Response({
            'total': self.service.total(expenses),
            'count': len(expenses),
            'results': ExpenseSerializer(expenses, many=True).data,
        })

    def create(self, request):
        ctx = OwnerContext.from_request(request)
        serializer = ExpenseWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        expense = self.service.add_expense(ctx, ExpenseDTO(**serializer.validated_data))
        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        self.service.delete_expense(ctx, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def categories(self, request):
        return Response(self.service.categories())

    @action(detail=False, methods=['get'])
    def summary(self, request):
        ctx = OwnerContext.from_request(request)
        return Response(self.service.summary(ctx, request.query_params.get('month')))
