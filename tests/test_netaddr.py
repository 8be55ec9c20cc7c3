from gecho.service.netaddr import join_host_port, split_host_port


def test_split_host_port():
    assert split_host_port("1.2.3.4:80") == ("1.2.3.4", "80")
    assert split_host_port(":8090") == ("", "8090")
    assert split_host_port("localhost") == ("localhost", "")
    assert split_host_port("[::1]:8080") == ("::1", "8080")
    assert split_host_port("[::1]") == ("::1", "")
    assert split_host_port("fe80::1") == ("fe80::1", "")
    assert split_host_port("[::1") == ("[::1", "")


def test_join_host_port():
    assert join_host_port("1.2.3.4", 80) == "1.2.3.4:80"
    assert join_host_port("::1", 8080) == "[::1]:8080"
    assert join_host_port("testclient", "50000") == "testclient:50000"
