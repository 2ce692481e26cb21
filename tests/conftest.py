import pytest

from app import create_app
from models import db
from models.users import User
from utils.tokens import get_jwt_token

# Two questions worth 1 and 2 marks; correct answers are option 0 and option 1
SAMPLE_QUESTIONS = [
    {"questionText": "2 + 2 = ?", "options": ["4", "5", "22"], "correctAnswer": 0, "marks": 1},
    {"questionText": "Capital of France?", "options": ["Rome", "Paris"], "correctAnswer": 1, "marks": 2},
]


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    created = []

    def _make(role="student", name=None):
        n = len(created) + 1
        user = User(name=name or f"{role.title()} {n}", email=f"{role}{n}@example.com", role=role)
        user.set_password("secret")
        db.session.add(user)
        db.session.commit()
        created.append(user)

        identity = {"user_id": user.id, "name": user.name, "email": user.email, "role": user.role}
        token = get_jwt_token(identity)
        return {
            "id": user.id,
            "identity": identity,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin", name="Ada Admin")


@pytest.fixture
def student(make_user):
    return make_user("student", name="Sam Student")


@pytest.fixture
def make_quiz(client):
    def _make(owner, **overrides):
        payload = {
            "title": "Sample quiz",
            "description": "A quiz for tests",
            "category": "General",
            "timeLimit": 10,
            "isPublished": True,
            "attemptsAllowed": 1,
            "questions": SAMPLE_QUESTIONS,
        }
        payload.update(overrides)
        resp = client.post("/api/quiz", json=payload, headers=owner["headers"])
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _make


@pytest.fixture
def submit(client):
    def _submit(user, quiz_id, answers=None, password=None):
        body = {"quizId": quiz_id, "answers": answers if answers is not None else {}}
        if password is not None:
            body["password"] = password
        return client.post("/api/attempt/submit", json=body, headers=user["headers"])

    return _submit
