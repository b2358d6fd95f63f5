# vitalis/models/enums.py
import enum

from vitalis.errors import ValidationError

class BloodType(str, enum.Enum):
    A_POS  = "A+"
    A_NEG  = "A-"
    B_POS  = "B+"
    B_NEG  = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS  = "O+"
    O_NEG  = "O-"

    @classmethod
    def parse(cls, value):
        """
        Text -> BloodType.
        Leer/Whitespace/None -> None (nicht gesetzt), unbekannter Code -> ValidationError.
        """
        if value is None or isinstance(value, cls):
            return value
        code = str(value).strip().upper()
        if not code:
            return None
        try:
            return cls(code)
        except ValueError:
            raise ValidationError(
                f"Grupo sanguíneo inválido: '{value}' (válidos: {', '.join(cls.codes())})"
            ) from None

    @classmethod
    def codes(cls) -> list[str]:
        return [b.value for b in cls]

    def __str__(self) -> str:
        return self.value
