"""JSON serialization for calc35 objects.

Registers are written in their 14-digit wire format and register identifiers
by letter, so a serialized register file reads the same as the CLI output.
"""

import importlib
import json
import logging
from typing import Any, Self

from calc35.registers.register import Register, RegId

logger = logging.getLogger(__name__)


class Calc35Encoder(json.JSONEncoder):
    """Custom JSON encoder for calc35 objects."""

    def encode(self, obj: Any) -> str:
        """Override encode to add type markers before encoding."""
        return super().encode(self._add_type_markers(obj))

    def default(self, obj: Any) -> Any:
        """Handle objects that can't be serialized by default JSON encoder."""
        return self._add_type_markers(obj)

    def _add_type_markers(self, obj: Any) -> Any:
        if isinstance(obj, Register):
            return {'_register': obj.as_decimal_string()}
        if isinstance(obj, RegId):
            return {'_reg_id': obj.value}
        if isinstance(obj, (list, tuple)):
            return [self._add_type_markers(item) for item in obj]
        if isinstance(obj, dict):
            if obj and all(isinstance(key, RegId) for key in obj):
                return {
                    '_dict': {key.value: self._add_type_markers(value) for key, value in obj.items()},
                    '_key_type': 'RegId',
                }
            return {'_dict': {k: self._add_type_markers(v) for k, v in obj.items()}}
        if hasattr(obj, '__dict__'):
            result = {'_class': obj.__class__.__name__, '_module': obj.__class__.__module__}
            for k, v in obj.__dict__.items():
                result[k] = self._add_type_markers(v)
            return result
        return obj


class Calc35Decoder(json.JSONDecoder):
    """Custom JSON decoder for calc35 objects."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(object_hook=self.object_hook, *args, **kwargs)  # noqa: B026

    def object_hook(self, dct: dict[str, Any]) -> Any:
        if '_register' in dct:
            return Register(dct['_register'])

        if '_reg_id' in dct:
            return RegId(dct['_reg_id'])

        if '_dict' in dct:
            inner_dict = dct['_dict']
            if dct.get('_key_type') == 'RegId':
                inner_dict = {RegId(k): v for k, v in inner_dict.items()}
            return inner_dict

        if '_class' not in dct:
            return dct

        class_name = dct.pop('_class')
        module_name = dct.pop('_module')

        try:
            module = importlib.import_module(module_name)
            cls = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            logger.warning(f'Could not deserialize {module_name}.{class_name}: {e}')
            return dct

        # Create instance without calling __init__
        obj = cls.__new__(cls)
        obj.__dict__.update(dct)
        return obj


class SerializableMixin:
    """Mixin to add serialize/deserialize methods to any class."""

    def serialize(self, indent: int | None = None) -> str:
        """Serialize object to JSON string."""
        return json.dumps(self, cls=Calc35Encoder, indent=indent)

    @classmethod
    def deserialize(cls, data: str) -> Self:
        """Deserialize object from JSON string.

        Raises:
            TypeError: if the JSON does not describe an instance of cls.
        """
        obj = json.loads(data, cls=Calc35Decoder)
        if not isinstance(obj, cls):
            raise TypeError(f'Serialized data is not a {cls.__name__}')
        return obj
