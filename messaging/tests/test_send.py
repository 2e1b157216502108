import pytest
from django.db import DatabaseError

from messaging.models import Message, MessageRequest, Thread, ThreadParticipant

THREADS_URL = "/api/messages/threads"

pytestmark = pytest.mark.django_db


@pytest.fixture
def sender(make_user):
    return make_user("sender")


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


def participant_handles(thread_payload):
    return sorted(p["handle"] for p in thread_payload["participants"])


def test_mutual_follow_opens_a_live_thread(sender, alice, follow, auth_client):
    follow(sender, alice, mutual=True)
    client = auth_client(sender)

    response = client.post(THREADS_URL, {"handles": ["alice"], "message": "hi"}, format="json")

    assert response.status_code == 201
    thread = response.data["thread"]
    assert participant_handles(thread) == ["alice", "sender"]
    assert thread["lastMessage"]["body"] == "hi"
    assert thread["lastMessage"]["sender"]["handle"] == "sender"
    assert thread["unreadCount"] == 0
    assert Thread.objects.count() == 1


def test_non_mutual_recipient_gets_a_message_request(sender, alice, follow, auth_client):
    follow(sender, alice)
    client = auth_client(sender)

    response = client.post(THREADS_URL, {"handles": ["alice"], "message": "hi"}, format="json")

    assert response.status_code == 202
    [request] = response.data["requests"]
    assert request["body"] == "hi"
    assert request["status"] == "pending"
    assert request["senderId"] == str(sender.pk)
    assert request["recipientId"] == str(alice.pk)
    assert "sender" not in request
    assert Thread.objects.count() == 0

    listing = client.get(THREADS_URL)
    assert listing.status_code == 200
    assert listing.data["threads"] == []


def test_second_send_to_same_set_appends(sender, alice, follow, auth_client):
    follow(sender, alice, mutual=True)
    client = auth_client(sender)

    first = client.post(THREADS_URL, {"handles": ["alice"], "message": "hi"}, format="json")
    second = client.post(
        THREADS_URL, {"handles": ["  @Alice "], "message": "again"}, format="json"
    )

    assert first.status_code == 201
    assert second.status_code == 200
    thread_id = first.data["thread"]["id"]
    assert second.data["thread"]["id"] == thread_id
    assert Thread.objects.count() == 1

    messages = client.get(f"{THREADS_URL}/{thread_id}/messages")
    assert [m["body"] for m in messages.data["messages"]] == ["hi", "again"]


def test_group_thread_is_reused_for_any_handle_order(sender, alice, bob, follow, auth_client):
    follow(sender, alice, mutual=True)
    follow(sender, bob, mutual=True)
    client = auth_client(sender)

    created = client.post(
        THREADS_URL, {"handles": ["alice", "bob"], "message": "hello both"}, format="json"
    )
    reused = client.post(
        THREADS_URL, {"handles": ["BOB", "alice", "@bob"], "message": "again"}, format="json"
    )

    assert created.status_code == 201
    assert reused.status_code == 200
    assert reused.data["thread"]["id"] == created.data["thread"]["id"]
    assert participant_handles(reused.data["thread"]) == ["alice", "bob", "sender"]


def test_thread_with_extra_participant_is_not_reused(sender, alice, bob, follow, auth_client):
    follow(sender, alice, mutual=True)
    follow(sender, bob, mutual=True)
    client = auth_client(sender)

    group = client.post(
        THREADS_URL, {"handles": ["alice", "bob"], "message": "group"}, format="json"
    )
    direct = client.post(THREADS_URL, {"handles": ["alice"], "message": "direct"}, format="json")

    assert direct.status_code == 201
    assert direct.data["thread"]["id"] != group.data["thread"]["id"]
    assert participant_handles(direct.data["thread"]) == ["alice", "sender"]
    assert Thread.objects.count() == 2


def test_mixed_recipients_only_gate_the_non_mutual_ones(sender, alice, bob, follow, auth_client):
    follow(sender, alice, mutual=True)
    client = auth_client(sender)

    response = client.post(
        THREADS_URL, {"handles": ["alice", "bob"], "message": "hey"}, format="json"
    )

    assert response.status_code == 202
    assert [r["recipientId"] for r in response.data["requests"]] == [str(bob.pk)]
    assert Thread.objects.count() == 0


def test_failing_request_recipient_is_skipped(sender, alice, bob, auth_client, monkeypatch):
    original_create = MessageRequest.objects.create

    def flaky_create(**kwargs):
        if kwargs["recipient"].handle == "alice":
            raise RuntimeError("storage hiccup")
        return original_create(**kwargs)

    monkeypatch.setattr(MessageRequest.objects, "create", flaky_create)
    client = auth_client(sender)

    response = client.post(
        THREADS_URL, {"handles": ["alice", "bob"], "message": "hey"}, format="json"
    )

    assert response.status_code == 202
    assert [r["recipientId"] for r in response.data["requests"]] == [str(bob.pk)]
    assert MessageRequest.objects.count() == 1


def test_blank_handles_are_rejected(sender, auth_client):
    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["  ", "@ "], "message": "hi"}, format="json"
    )

    assert response.status_code == 400
    assert response.data["detail"] == "Add at least one recipient handle."


def test_unknown_handles_are_not_found(sender, auth_client):
    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["nobody", "ghost"], "message": "hi"}, format="json"
    )

    assert response.status_code == 404
    assert Thread.objects.count() == 0
    assert MessageRequest.objects.count() == 0


def test_messaging_only_yourself_is_not_found(sender, auth_client):
    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["sender"], "message": "note to self"}, format="json"
    )

    assert response.status_code == 404


def test_unknown_handles_are_dropped(sender, alice, follow, auth_client):
    follow(sender, alice, mutual=True)

    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["ghost", "alice"], "message": "hi"}, format="json"
    )

    assert response.status_code == 201
    assert participant_handles(response.data["thread"]) == ["alice", "sender"]


@pytest.mark.parametrize(
    "payload",
    [
        {"handles": ["alice"], "message": "   "},
        {"handles": ["alice"], "message": ""},
        {"handles": [], "message": "hi"},
        {"handles": ["alice"] * 21, "message": "hi"},
        {"handles": ["a"], "message": "hi"},
        {"handles": ["alice"], "message": "x" * 2001},
        {"handles": ["alice"], "message": "hi", "subject": "s" * 141},
    ],
)
def test_invalid_payloads_are_rejected_before_any_write(payload, sender, alice, follow, auth_client):
    follow(sender, alice, mutual=True)

    response = auth_client(sender).post(THREADS_URL, payload, format="json")

    assert response.status_code == 400
    assert Thread.objects.count() == 0
    assert Message.objects.count() == 0


def test_moderation_rejects_before_any_write(sender, alice, auth_client):
    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["alice"], "message": "you are a b1tch"}, format="json"
    )

    assert response.status_code == 400
    assert response.data["detail"] == "Please keep language clean and respectful (Message)."
    assert MessageRequest.objects.count() == 0
    assert Thread.objects.count() == 0


def test_moderation_checks_the_subject(sender, alice, follow, auth_client):
    follow(sender, alice, mutual=True)

    response = auth_client(sender).post(
        THREADS_URL,
        {"handles": ["alice"], "message": "hello", "subject": "free crypto"},
        format="json",
    )

    assert response.status_code == 400
    assert response.data["detail"].endswith("(Subject).")


def test_subject_is_stored_on_new_threads(sender, alice, follow, auth_client):
    follow(sender, alice, mutual=True)

    response = auth_client(sender).post(
        THREADS_URL,
        {"handles": ["alice"], "message": "hello", "subject": "  Sunday plans "},
        format="json",
    )

    assert response.data["thread"]["subject"] == "Sunday plans"


def test_new_thread_marks_only_the_sender_as_read(sender, alice, follow, auth_client):
    follow(sender, alice, mutual=True)

    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["alice"], "message": "hi"}, format="json"
    )

    memberships = {
        m.user_id: m for m in ThreadParticipant.objects.filter(thread_id=response.data["thread"]["id"])
    }
    assert memberships[sender.pk].last_read_at is not None
    assert memberships[alice.pk].last_read_at is None


def test_messaging_requires_a_bearer_credential(api_client):
    assert api_client.get(THREADS_URL).status_code == 401
    assert api_client.post(THREADS_URL, {}, format="json").status_code == 401


def test_invalid_bearer_credential_is_unauthorized(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

    assert api_client.get(THREADS_URL).status_code == 401


def test_failed_first_message_rolls_back_the_new_thread(sender, alice, follow, auth_client, monkeypatch):
    follow(sender, alice, mutual=True)

    def failing_create(**kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(Message.objects, "create", failing_create)
    client = auth_client(sender)

    with pytest.raises(DatabaseError):
        client.post(THREADS_URL, {"handles": ["alice"], "message": "hi"}, format="json")

    assert Thread.objects.count() == 0
    assert ThreadParticipant.objects.count() == 0
    assert Message.objects.count() == 0


def test_handles_longer_than_a_handle_are_rejected(sender, auth_client):
    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["x" * 33], "message": "hi"}, format="json"
    )

    assert response.status_code == 400
    assert "handles" in response.data


def test_at_prefix_does_not_count_towards_the_handle_limit(sender, auth_client):
    response = auth_client(sender).post(
        THREADS_URL, {"handles": ["@" + "x" * 32], "message": "hi"}, format="json"
    )

    assert response.status_code == 404
