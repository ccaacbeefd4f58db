from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.context import OwnerContext
from core.dto import StudentDTO
from .serializers import StudentSerializer, StudentWriteSerializer
from .services import StudentService
from api.permissions import IsOwner


class StudentViewSet(viewsets.ViewSet):
    """
    ViewSet for Student management
    Room occupancy is kept in step with every change
    """
    permission_classes = [IsAuthenticated, IsOwner]
    lookup_value_regex = r'\d+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = StudentService()

    def _dto(self, request, instance=None) -> StudentDTO:
        data = request.data.copy() if hasattr(request.data, 'copy') else dict(request.data)
        if instance is not None:
            for field in ('name', 'phone', 'parent_phone', 'national_id', 'bed', 'rent'):
                data.setdefault(field, getattr(instance, field))
            data.setdefault('room', instance.room_id)
        serializer = StudentWriteSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        validated = serializer.validated_data
        return StudentDTO(
            name=validated['name'],
            phone=validated['phone'],
            parent_phone=validated.get('parent_phone', ''),
            national_id=validated.get('national_id', ''),
            room_id=validated['room'],
            bed=validated.get('bed', ''),
            rent=validated['rent'],
            images={
                kind: validated[f'{kind}_image']
                for kind in ('profile', 'id_front', 'id_back')
                if validated.get(f'{kind}_image')
            },
        )

    def list(self, request):
        ctx = OwnerContext.from_request(request)
        students = self.service.list_students(
            ctx,
            search=request.query_params.get('search', ''),
            status=request.query_params.get('status', ''),
        )
        return Response(StudentSerializer(students, many=True).data)

    def retrieve(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        return Response(StudentSerializer(self.service.get_student(ctx, pk)).data)

    def create(self, request):
        ctx = OwnerContext.from_request(request)
        student = self.service.create_student(ctx, self._dto(request))
        return Response(StudentSerializer(student).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        current = self.service.get_student(ctx, pk)
        dto = self._dto(request, current)
        student = self.service.update_student(ctx, pk, dto)
        if dto.images:
            student = self.service.attach_images(ctx, student.id, dto.images)
        return Response(StudentSerializer(student).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    def destroy(self, request, pk=None):
        ctx = OwnerContext.from_request(request)
        self.service.delete_student(ctx, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def toggle_status(self, request, pk=None):
        """
        Activate / deactivate a student.
        A second toggle while the first is still running is accepted as a no-op.
        """
        ctx = OwnerContext.from_request(request)
        result = self.service.toggle_status(ctx, int(pk))
        if result is None:
            return Response(
                {'applied': False, 'detail': 'A status change for this student is already in progress'},
                status=status.HTTP_202_ACCEPTED
            )
        if not result.ok:
            raise result.error
        return Response({'applied': True, 'student': StudentSerializer(result.value).data})
