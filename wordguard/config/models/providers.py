# wordguard/config/models/providers.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr


class LexicalApiConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    api_url: str = "https://cn.apihz.cn/api/zici/mgc.php"
    api_id: str = ""
    api_key: Optional[SecretStr] = None


class BaiduConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    api_key: str = ""
    secret_key: Optional[SecretStr] = None
    token_url: str = "https://aip.baidubce.com/oauth/2.0/token"
    censor_url: str = "https://aip.baidubce.com/rest/2.0/solution/v1/text_censor/v2/user_defined"


class AliyunConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    access_key_id: str = ""
    access_key_secret: Optional[SecretStr] = None
    endpoint: str = "green-cip.cn-shanghai.aliyuncs.com"
    service: str = "chat_detection"


class TencentConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    secret_id: str = ""
    secret_key: Optional[SecretStr] = None
    region: str = "ap-shanghai"
    endpoint: str = "tms.tencentcloudapi.com"


class OpenAIConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    api_key: Optional[SecretStr] = None
    base_url: str = "https://api.siliconflow.cn/v1"
    model: str = "deepseek-ai/DeepSeek-V2.5"
    request_timeout: float = 8
    temperature: float = 0.1
