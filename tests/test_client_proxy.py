"""
Tests for the remote entity tag client proxy.
"""
import asyncio
import pytest
from unittest.mock import AsyncMock

from entity_tags.services.client_proxy import EntityTagAdminClientProxy
from entity_tags.services.dtos import TagAssignmentRequest
from entity_tags.services.errors import RemoteCallError, RemoteServiceErrorInfo


class TestClientProxyDispatch:
    """Each method maps to exactly one named dispatch."""

    @pytest.mark.asyncio
    async def test_add_tag_dispatches_once(self, mock_dispatch, assignment_request):
        """Test add_tag_to_entity dispatches AddTagToEntityAsync with the same payload."""
        proxy = EntityTagAdminClientProxy(mock_dispatch)

        await proxy.add_tag_to_entity(assignment_request)

        mock_dispatch.assert_awaited_once()
        name, payload = mock_dispatch.call_args.args
        assert name == "AddTagToEntityAsync"
        assert payload is assignment_request

    @pytest.mark.asyncio
    async def test_remove_tag_dispatches_once(self, mock_dispatch, removal_request):
        """Test remove_tag_from_entity dispatches RemoveTagFromEntityAsync."""
        proxy = EntityTagAdminClientProxy(mock_dispatch)

        await proxy.remove_tag_from_entity(removal_request)

        mock_dispatch.assert_awaited_once()
        name, payload = mock_dispatch.call_args.args
        assert name == "RemoveTagFromEntityAsync"
        assert payload is removal_request

    @pytest.mark.asyncio
    async def test_set_tags_dispatches_once(self, mock_dispatch, set_request):
        """Test set_entity_tags dispatches SetEntityTagsAsync."""
        proxy = EntityTagAdminClientProxy(mock_dispatch)

        await proxy.set_entity_tags(set_request)

        mock_dispatch.assert_awaited_once()
        name, payload = mock_dispatch.call_args.args
        assert name == "SetEntityTagsAsync"
        assert payload is set_request

    @pytest.mark.asyncio
    async def test_page_scenario_payload_on_the_wire(self, mock_dispatch):
        """Test the dispatched payload for page 42 / tag 7 serializes as expected."""
        proxy = EntityTagAdminClientProxy(mock_dispatch)
        request = TagAssignmentRequest(entity_id="42", entity_type="Page", tag_id="7")

        await proxy.add_tag_to_entity(request)

        name, payload = mock_dispatch.call_args.args
        assert name == "AddTagToEntityAsync"
        assert payload.model_dump(by_alias=True) == {
            "entityId": "42",
            "entityType": "Page",
            "tagId": "7",
        }

    @pytest.mark.asyncio
    async def test_payload_not_modified(self, mock_dispatch, set_request):
        """Test the proxy leaves the request untouched."""
        before = set_request.model_dump()
        proxy = EntityTagAdminClientProxy(mock_dispatch)

        await proxy.set_entity_tags(set_request)

        assert set_request.model_dump() == before


class TestClientProxyOutcome:
    """Success and failure are passed through unchanged."""

    @pytest.mark.asyncio
    async def test_success_returns_none(self, assignment_request):
        """Test a successful call returns None even if dispatch returns a body."""
        dispatch = AsyncMock(return_value={"ignored": True})
        proxy = EntityTagAdminClientProxy(dispatch)

        result = await proxy.add_tag_to_entity(assignment_request)

        assert result is None

    @pytest.mark.asyncio
    async def test_remote_error_propagates_unchanged(self, removal_request):
        """Test the dispatch error object reaches the caller as-is."""
        error = RemoteCallError(
            "Tag not found",
            status_code=404,
            error=RemoteServiceErrorInfo(code="CmsKit:Tag:0002", message="Tag not found"),
        )
        dispatch = AsyncMock(side_effect=error)
        proxy = EntityTagAdminClientProxy(dispatch)

        with pytest.raises(RemoteCallError) as exc_info:
            await proxy.remove_tag_from_entity(removal_request)

        assert exc_info.value is error
        assert exc_info.value.status_code == 404
        assert exc_info.value.error.code == "CmsKit:Tag:0002"

    @pytest.mark.asyncio
    async def test_transport_error_propagates_unchanged(self, set_request):
        """Test transport failures (no status code) are not translated."""
        error = RemoteCallError("Remote call SetEntityTagsAsync failed: connection refused")
        dispatch = AsyncMock(side_effect=error)
        proxy = EntityTagAdminClientProxy(dispatch)

        with pytest.raises(RemoteCallError) as exc_info:
            await proxy.set_entity_tags(set_request)

        assert exc_info.value is error
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_cancellation_reaches_dispatch(self, assignment_request):
        """Test cancelling the caller cancels the in-flight dispatch."""
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_dispatch(name, payload):
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        proxy = EntityTagAdminClientProxy(slow_dispatch)
        task = asyncio.create_task(proxy.add_tag_to_entity(assignment_request))
        await started.wait()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert cancelled.is_set()


class TestClientProxyConcurrency:
    """Concurrent calls on one proxy stay independent."""

    @pytest.mark.asyncio
    async def test_concurrent_calls_dispatch_independently(self):
        """Test 100 concurrent adds produce 100 distinct dispatches."""
        calls = []

        async def recording_dispatch(name, payload):
            await asyncio.sleep(0)
            calls.append((name, payload))

        proxy = EntityTagAdminClientProxy(recording_dispatch)
        requests = [
            TagAssignmentRequest(entity_id=str(i), entity_type="Page", tag_id=f"tag-{i}")
            for i in range(100)
        ]

        await asyncio.gather(*(proxy.add_tag_to_entity(r) for r in requests))

        assert len(calls) == 100
        assert {name for name, _ in calls} == {"AddTagToEntityAsync"}
        assert {id(payload) for _, payload in calls} == {id(r) for r in requests}
        for _, payload in calls:
            assert payload.tag_id == f"tag-{payload.entity_id}"
