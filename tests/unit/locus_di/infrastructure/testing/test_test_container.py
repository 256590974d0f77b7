"""Unit tests for TestContainer and create_mock_container."""

from abc import ABC, abstractmethod
from unittest.mock import Mock

from locus_di.application.container import DIContainer
from locus_di.application.introspector import service_id
from locus_di.infrastructure.testing import TestContainer, create_mock_container


class EmailService(ABC):
    @abstractmethod
    def send(self, to: str) -> bool:
        pass


class SmtpEmailService(EmailService):
    def send(self, to: str) -> bool:
        return True


class UserService:
    def __init__(self, email: EmailService):
        self.email = email


class TestTestContainer:
    """Test cases for TestContainer."""

    def test_empty_test_container(self):
        """Test creating a test container without parent."""
        container = TestContainer()

        assert container.get(TestContainer) is container
        assert container.get_definitions() == {}
        assert container.overrides == {}

    def test_inherits_parent_registrations(self):
        """Test that definitions, bindings, tags and transients are copied."""
        parent = DIContainer({"greeting": "hello"})
        parent.bind(EmailService, SmtpEmailService)
        parent.tag(UserService, "users")
        parent.transient(UserService)

        container = TestContainer(parent)

        assert container.get("greeting") == "hello"
        assert isinstance(container.get(EmailService), SmtpEmailService)
        assert container.get_tags() == {"users": [service_id(UserService)]}
        assert container.get(UserService) is not container.get(UserService)

    def test_parent_instances_not_shared(self):
        """Test that the parent's cached instances are not reused."""
        parent = DIContainer()
        parent.bind(EmailService, SmtpEmailService)
        from_parent = parent.get(EmailService)

        container = TestContainer(parent)

        assert container.get(EmailService) is not from_parent

    def test_mock_overrides_dependency(self):
        """Test that dependents receive the mock."""
        parent = DIContainer()
        parent.bind(EmailService, SmtpEmailService)
        container = TestContainer(parent)
        mock_email = Mock(spec=EmailService)

        container.mock(EmailService, mock_email)

        assert container.get(UserService).email is mock_email
        assert container.overrides == {service_id(EmailService): mock_email}

    def test_mock_does_not_touch_parent(self):
        """Test that overrides stay in the test container."""
        parent = DIContainer()
        parent.bind(EmailService, SmtpEmailService)
        container = TestContainer(parent)

        container.mock(EmailService, Mock())

        assert isinstance(parent.get(EmailService), SmtpEmailService)

    def test_mock_rebuilds_cached_dependents(self):
        """Test that dependents resolved before the mock are rebuilt."""
        parent = DIContainer()
        parent.bind(EmailService, SmtpEmailService)
        container = TestContainer(parent)
        before = container.get(UserService)

        mock_email = Mock()
        container.mock(EmailService, mock_email)

        after = container.get(UserService)
        assert after is not before
        assert after.email is mock_email

    def test_mock_transient(self):
        """Test that a transient mock factory runs on every resolution."""
        container = TestContainer()
        container.mock_transient("request.context", lambda: object())

        assert container.get("request.context") is not container.get("request.context")

    def test_reset_overrides_restores_parent(self):
        """Test that clearing overrides restores parent registrations."""
        parent = DIContainer()
        parent.bind(EmailService, SmtpEmailService)
        container = TestContainer(parent)
        container.mock(EmailService, Mock())
        container.mock_transient("request.context", lambda: object())

        container.reset_overrides()

        assert isinstance(container.get(EmailService), SmtpEmailService)
        assert not container.has("request.context")
        assert container.overrides == {}

    def test_context_manager_resets_overrides(self):
        """Test that leaving the with block clears overrides."""
        parent = DIContainer()
        parent.bind(EmailService, SmtpEmailService)

        with TestContainer(parent) as container:
            container.mock(EmailService, Mock())
            assert not isinstance(container.get(EmailService), SmtpEmailService)

        assert isinstance(container.get(EmailService), SmtpEmailService)


class TestCreateMockContainer:
    """Test cases for create_mock_container."""

    def test_creates_container_with_mocks(self):
        """Test that every pair becomes a mock."""
        mock_email = Mock()
        mock_cache = Mock()

        container = create_mock_container((EmailService, mock_email), ("cache.redis", mock_cache))

        assert container.get(EmailService) is mock_email
        assert container.get("cache.redis") is mock_cache
        assert container.get(UserService).email is mock_email
