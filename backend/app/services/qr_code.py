"""
QRコード生成サービス
"""

import qrcode
import base64
from io import BytesIO

class QRCodeService:
    """QRコード生成を担当するサービスクラス"""

    @staticmethod
    def generate_qr_data_url(
        data: str,
        box_size: int = 10,
        border: int = 4,
        fill_color: str = "black",
        back_color: str = "white"
    ) -> str:
        """
        任意の文字列（otpauth URIなど）をQRコード化し、PNGのdata URLとして返す

        Args:
            data: QRコードに含めるデータ
            box_size: QRコードのボックスサイズ
            border: ボーダーサイズ
            fill_color: 塗りつぶし色
            back_color: 背景色

        Returns:
            QRコードのbase64データ
        """
        qr = qrcode.QRCode(
            version=None,
            box_size=box_size,
            border=border
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(
            fill_color=fill_color,
            back_color=back_color
        )

        buffer = BytesIO()
        img.save(buffer, format="PNG")
        img_str = base64.b64encode(buffer.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"
