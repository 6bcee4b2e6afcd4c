from rpx.cli import app

app(prog_name="rpx")
