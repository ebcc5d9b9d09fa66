from app.api.envelope import ApiError, ApiSuccess
from app.exceptions import DatabaseError, NotFoundError
from app.schemas.user import UserRead


class TestApiSuccess:

    def test_wraps_output_view(self):
        user = UserRead(id=1, name="Test User", age=25, email="test@example.com")

        body = ApiSuccess[UserRead](data=user).model_dump()

        assert body == {
            "status": 200,
            "data": {"id": 1, "name": "Test User", "age": 25, "email": "test@example.com"},
        }

    def test_wraps_list(self):
        users = [UserRead(id=i, name="Some User", age=20, email=f"u{i}@example.com") for i in (1, 2)]

        body = ApiSuccess[list[UserRead]](data=users).model_dump()

        assert body["status"] == 200
        assert [u["id"] for u in body["data"]] == [1, 2]

    def test_wraps_bool(self):
        assert ApiSuccess[bool](data=True).model_dump() == {"status": 200, "data": True}


class TestApiError:

    def test_from_not_found(self):
        body = ApiError.from_service_error(NotFoundError("User not found with id: 999")).to_content()

        assert body == {"status": 404, "message": "User not found with id: 999", "code": "not_found", "fields": None}

    def test_from_constraint_violation_with_custom_status(self):
        err = DatabaseError("Database error: dup", fields=["email"], constraint="unique", client_error=True, status_code=409)

        body = ApiError.from_service_error(err).to_content()

        assert body["status"] == 409
        assert body["code"] == "database"
        assert body["fields"] == ["email"]

    def test_errors_only_emitted_when_present(self):
        plain = ApiError(status=500, message="x").to_content()
        detailed = ApiError(status=400, message="x", errors=[{"loc": ["body", "age"], "msg": "bad"}]).to_content()

        assert "errors" not in plain
        assert detailed["errors"] == [{"loc": ["body", "age"], "msg": "bad"}]
