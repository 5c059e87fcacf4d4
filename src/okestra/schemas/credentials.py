from pydantic import BaseModel, ConfigDict

from ..errors import ValidationError

USER_OCID = "user_ocid"
KUBECONFIG_KEY = "K8Sconfig"


class OracleCredential(BaseModel):
    """API signing credential stored in a secret."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    user_ocid: str = ""
    tenancy_ocid: str = ""
    api_key: str = ""
    api_key_fingerprint: str = ""
    region: str = ""
    compartment_ocid: str = ""

    @classmethod
    def from_values(cls, values: dict[str, str]) -> "OracleCredential":
        return cls.model_validate({k: v for k, v in values.items() if v is not None})

    def require_user_ocid(self) -> str:
        if not self.user_ocid:
            raise ValidationError("empty user OCID")
        return self.user_ocid
