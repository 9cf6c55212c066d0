import pytest
import uuid
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.urls import reverse

from tracker.data.models import Friendship, UserProfile
from tracker.errors import FriendshipExists
from tracker.services import social

User = get_user_model()


def profile_for(user, **fields):
    return UserProfile.objects.create(id=user.id, **fields)


@pytest.fixture
def profiles(user, other_user):
    return profile_for(user, display_name="Ana"), profile_for(other_user, display_name="Bruno")


@pytest.mark.django_db
class TestFriendRequests:
    def test_request_then_accept(self, api, user, other_user, profiles):
        resp = api.post(reverse("friend-requests"), {"user_id": str(other_user.id)}, format="json")
        assert resp.status_code == 201
        assert resp.json()["status"] == "pending"

        incoming = social.list_pending_requests(other_user.id)
        assert len(incoming) == 1
        assert incoming[0][1].display_name == "Ana"
        assert social.list_pending_requests(user.id) == []

        social.accept_friend_request(other_user.id, user.id)

        friendship = Friendship.objects.get()
        assert friendship.status == "accepted"
        assert friendship.action_user_id == other_user.id
        assert [p.id for p in social.list_friends(user.id)] == [other_user.id]
        assert [p.id for p in social.list_friends(other_user.id)] == [user.id]

    def test_cannot_befriend_yourself(self, api, user, profiles):
        resp = api.post(reverse("friend-requests"), {"user_id": str(user.id)}, format="json")

        assert resp.status_code == 400

    def test_duplicate_request_conflicts_in_either_direction(self, api, user, other_user, profiles):
        social.send_friend_request(other_user.id, user.id)

        resp = api.post(reverse("friend-requests"), {"user_id": str(other_user.id)}, format="json")

        assert resp.status_code == 409
        assert Friendship.objects.count() == 1

    def test_declined_pair_may_request_again(self, user, other_user, profiles):
        social.send_friend_request(user.id, other_user.id)
        Friendship.objects.update(status="declined")

        social.send_friend_request(user.id, other_user.id)

        assert Friendship.objects.get().status == "pending"

    def test_only_the_addressee_can_accept(self, api, user, other_user, profiles):
        social.send_friend_request(user.id, other_user.id)

        url = reverse("friend-accept", kwargs={"user_id": str(other_user.id)})
        assert api.post(url).status_code == 404
        assert Friendship.objects.get().status == "pending"

    def test_decline_deletes_request(self, api, user, other_user, profiles):
        social.send_friend_request(other_user.id, user.id)

        url = reverse("friend-decline", kwargs={"user_id": str(other_user.id)})
        resp = api.post(url)

        assert resp.status_code == 204
        assert Friendship.objects.count() == 0

    def test_remove_friend(self, api, user, other_user, profiles):
        social.send_friend_request(other_user.id, user.id)
        social.accept_friend_request(user.id, other_user.id)

        url = reverse("friend-detail", kwargs={"user_id": str(other_user.id)})
        assert api.delete(url).status_code == 204
        assert api.delete(url).status_code == 404
        assert social.list_friends(user.id) == []


    def test_reverse_row_for_same_pair_is_refused(self, user, other_user, profiles):
        social.send_friend_request(user.id, other_user.id)

        with pytest.raises(IntegrityError), transaction.atomic():
            Friendship.objects.create(user_id_1=other_user.id, user_id_2=user.id)

    def test_crossed_request_that_slips_past_the_check_conflicts(self, user, other_user, profiles, monkeypatch):
        social.send_friend_request(user.id, other_user.id)
        monkeypatch.setattr(social, "friendship_between", lambda a, b: None)

        with pytest.raises(FriendshipExists):
            social.send_friend_request(other_user.id, user.id)

        assert Friendship.objects.count() == 1

@pytest.mark.django_db
class TestSearchAndRanking:
    def test_search_excludes_self_and_reports_status(self, api, user, other_user, profiles):
        third = User.objects.create_user(username="third")
        profile_for(third, display_name="Anabel")
        social.send_friend_request(user.id, other_user.id)

        data = api.get(reverse("user-search"), {"q": "  an "}).json()["results"]

        assert [r["profile"]["display_name"] for r in data] == ["Anabel"]
        assert data[0]["friendship_status"] is None
        assert data[0]["can_send_request"] is True

        data = api.get(reverse("user-search"), {"q": "bru"}).json()["results"]
        assert data[0]["friendship_status"] == "pending"
        assert data[0]["can_send_request"] is False

    def test_blank_search_returns_nothing(self, user, profiles):
        assert social.search_users(user.id, "   ") == []

    def test_weekly_ranking_orders_and_positions(self, api, user, other_user):
        profile_for(user, weekly_points=30)
        profile_for(other_user, weekly_points=80, display_name="Bruno")
        anonymous = uuid.UUID("12345678-1234-5678-1234-567812345678")
        UserProfile.objects.create(id=anonymous, weekly_points=50)

        data = api.get(reverse("weekly-ranking")).json()

        assert [r["weekly_points"] for r in data["ranking"]] == [80, 50, 30]
        assert data["ranking"][0]["user_name"] == "Bruno"
        assert data["ranking"][1]["user_name"] == "User 12345678"
        assert data["current_user_position"] == 3
        assert data["current_user_weekly_points"] == 30

    def test_position_outside_the_ranking_counts_better_users(self, user, monkeypatch):
        monkeypatch.setattr(social, "RANKING_LIMIT", 2)
        for points in (90, 70, 60):
            UserProfile.objects.create(id=uuid.uuid4(), weekly_points=points)
        profile_for(user, weekly_points=65)

        ranking, me, position = social.weekly_ranking(user.id)

        assert len(ranking) == 2
        assert position == 3
