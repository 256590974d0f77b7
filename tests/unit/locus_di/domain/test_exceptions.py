"""Unit tests for domain exceptions."""

import pytest

from locus_di.domain.exceptions import (
    CircularDependencyError,
    CompilationError,
    DIException,
    ResolutionError,
    ServiceNotFoundError,
    UninstantiableTypeError,
    UnresolvableParameterError,
)


class TestDIException:
    """Test cases for the base DIException class."""

    def test_di_exception_is_exception(self):
        """Test that DIException inherits from Exception."""
        assert issubclass(DIException, Exception)

    def test_di_exception_can_be_raised(self):
        """Test that DIException can be raised with a message."""
        with pytest.raises(DIException, match="Test error"):
            raise DIException("Test error")


class TestServiceNotFoundError:
    """Test cases for ServiceNotFoundError."""

    def test_message_names_service(self):
        """Test that the message contains the missing identifier."""
        error = ServiceNotFoundError("mailer.smtp")

        assert error.service_id == "mailer.smtp"
        assert str(error) == "Service 'mailer.smtp' not found"

    def test_is_not_a_resolution_error(self):
        """Test that a missing service is distinct from a resolution failure."""
        assert issubclass(ServiceNotFoundError, DIException)
        assert not issubclass(ServiceNotFoundError, ResolutionError)


class TestResolutionError:
    """Test cases for ResolutionError."""

    def test_message_without_reason(self):
        """Test the message when no reason is given."""
        error = ResolutionError("app.Mailer")

        assert error.service_id == "app.Mailer"
        assert error.reason is None
        assert str(error) == "Cannot resolve service 'app.Mailer'"

    def test_message_with_reason(self):
        """Test the message includes the reason."""
        error = ResolutionError("app.Mailer", "Factory failed: boom")

        assert error.reason == "Factory failed: boom"
        assert str(error) == "Cannot resolve service 'app.Mailer'. Reason: Factory failed: boom"


class TestCircularDependencyError:
    """Test cases for the CircularDependencyError class."""

    def test_is_resolution_error(self):
        """Test that CircularDependencyError is a ResolutionError."""
        assert issubclass(CircularDependencyError, ResolutionError)

    def test_chain_is_rendered(self):
        """Test that the dependency chain appears in the message."""
        error = CircularDependencyError(["app.A", "app.B", "app.A"])

        assert error.dependency_chain == ["app.A", "app.B", "app.A"]
        assert str(error) == "Circular dependency detected: app.A -> app.B -> app.A"
        assert error.service_id == "app.A"

    def test_self_reference(self):
        """Test a service that depends on itself."""
        error = CircularDependencyError(["svc", "svc"])

        assert "svc -> svc" in str(error)


class TestUnresolvableParameterError:
    """Test cases for UnresolvableParameterError."""

    def test_message_names_parameter_type_and_owner(self):
        """Test that diagnostics name the parameter, its type and its owner."""
        error = UnresolvableParameterError("app.Mailer", "port", "int")

        assert isinstance(error, ResolutionError)
        assert error.owner == "app.Mailer"
        assert error.parameter == "port"
        assert error.type_label == "int"
        assert str(error) == "Cannot resolve constructor parameter 'port' (int) for app.Mailer"


class TestUninstantiableTypeError:
    """Test cases for UninstantiableTypeError."""

    def test_is_both_not_found_and_resolution_error(self):
        """Test that the error can be caught as either kind."""
        error = UninstantiableTypeError("app.Repository")

        assert isinstance(error, ServiceNotFoundError)
        assert isinstance(error, ResolutionError)
        assert error.service_id == "app.Repository"
        assert "cannot be instantiated" in str(error)


class TestCompilationError:
    """Test cases for CompilationError."""

    def test_compilation_error_message(self):
        """Test that CompilationError keeps its message."""
        with pytest.raises(DIException, match="Cannot write"):
            raise CompilationError("Cannot write compiled container")
